"""goforge command-line interface.

Usage::

    goforge init my-service
    goforge init my-service --module example.com/my-service --database MySQL
    goforge init my-service --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.prompt import Prompt

from goforge import __version__
from goforge.config import Config
from goforge.errors import ExternalToolError, InvalidInputError, ScaffoldError
from goforge.scaffolder import (
    DatabaseBackend,
    GenerationResult,
    ProjectGenerator,
    ScaffoldPlan,
    TemplateContext,
    resolve_context,
)
from goforge.scaffolder.context import default_module_path
from goforge.utils import (
    console,
    error_console,
    format_duration,
    print_error,
    print_success,
    print_summary_table,
)

DATABASE_CHOICES = [backend.value for backend in DatabaseBackend]


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goforge",
        description="goforge -- Go modular service project generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  goforge init demo\n"
            "  goforge init demo --module example.com/demo --database PostgreSQL\n"
            "  goforge init demo -o ./projects --dry-run\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init = subparsers.add_parser(
        "init",
        help="Initialize a new Go modular service project",
        description=(
            "Creates a new project with a layered structure, versioned API, "
            "configuration, database wiring and dependency injection."
        ),
    )
    init.add_argument("project_name", help="Name of the project directory to create")
    init.add_argument(
        "--module", "-m",
        default=None,
        help="Go module path (prompted for if omitted)",
    )
    init.add_argument(
        "--database", "-d",
        default=None,
        help=f"Database backend: {', '.join(DATABASE_CHOICES)} (prompted for if omitted)",
    )
    init.add_argument(
        "--output", "-o",
        default=None,
        help="Directory the project is created in (default: current directory)",
    )
    init.add_argument(
        "--config",
        default=None,
        help="JSON configuration file (default: GOFORGE_* environment variables)",
    )
    init.add_argument(
        "--skip-build",
        action="store_true",
        help="Do not run 'go get' or 'go generate'",
    )
    init.add_argument(
        "--clean-on-failure",
        action="store_true",
        help="Delete the project directory if generation fails",
    )
    init.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be generated without writing anything",
    )
    init.add_argument(
        "--no-input",
        action="store_true",
        help="Never prompt; use defaults for anything not given",
    )
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Build the run configuration; command-line flags win.

    Raises:
        InvalidInputError: If the config file cannot be read or parsed, or a
            setting fails validation.
    """
    try:
        config = Config.load(Path(args.config)) if args.config else Config.from_env()
    except (OSError, ValueError, ValidationError) as exc:
        source = args.config or "GOFORGE_* environment"
        raise InvalidInputError(
            f"Invalid configuration ({source}): {exc}", step="load config"
        ) from exc
    if args.output:
        config.output_dir = Path(args.output)
    if args.skip_build:
        config.build.skip_build = True
    if args.clean_on_failure:
        config.clean_on_failure = True
    return config


# ---------------------------------------------------------------------------
# Interactive input
# ---------------------------------------------------------------------------


def collect_inputs(args: argparse.Namespace) -> tuple[str, str]:
    """Return ``(module_path, database)``, prompting for missing values.

    Raises:
        InvalidInputError: If the user cancels a prompt.
    """
    module = args.module
    database = args.database
    try:
        if module is None:
            default = default_module_path(args.project_name)
            module = default if args.no_input else Prompt.ask(
                "Enter the Go module name", default=default, console=console
            )
        if database is None:
            default = DatabaseBackend.POSTGRESQL.value
            database = default if args.no_input else Prompt.ask(
                "Select the database you will use",
                choices=DATABASE_CHOICES,
                default=default,
                console=console,
            )
    except (KeyboardInterrupt, EOFError) as exc:
        raise InvalidInputError("Operation cancelled.") from exc
    return module, database


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def print_context(context: TemplateContext) -> None:
    console.print(f"Creating a new project named: [bold]{context.project_name}[/bold]")
    console.print(f"   - Module: {context.module_path}")
    console.print(f"   - Database: {context.database.value}")


def print_plan(plan: ScaffoldPlan) -> None:
    console.print(f"[bold]Dry run:[/bold] nothing will be written to {plan.root}")
    console.print("Directories:")
    for path in plan.directories:
        console.print(f"   {path.relative_to(plan.root)}/")
    console.print("Files:")
    for path in plan.files:
        console.print(f"   {path.relative_to(plan.root)}")
    if plan.steps:
        console.print("Build steps:")
        for step in plan.steps:
            console.print(f"   {' '.join(step.command)}")


def print_result(result: GenerationResult, context: TemplateContext) -> None:
    console.print()
    print_success("Project ready to run!")
    print_summary_table(
        {
            "Location": str(result.root),
            "Directories": str(len(result.directories)),
            "Files": str(len(result.files)),
            "Build steps": str(len(result.steps)) if result.steps else "skipped",
            "Duration": format_duration(result.duration),
        },
        title=context.project_name,
    )
    console.print("Next steps:")
    console.print(f"  cd {result.root}")
    if not result.steps:
        console.print("  go mod tidy && go generate ./...")
    console.print("  go run cmd/api/main.go")


def report_error(exc: ScaffoldError) -> None:
    """Print *exc* to stderr with the failing step and any tool output."""
    print_error(f"Error ({exc.step}): {exc}")
    if isinstance(exc, ExternalToolError) and exc.output:
        error_console.print("Output:")
        error_console.print(exc.output, markup=False, highlight=False)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def run_init(args: argparse.Namespace) -> None:
    config = load_config(args)
    module, database = collect_inputs(args)
    context = resolve_context(args.project_name, module, database, config.output_dir)
    print_context(context)

    generator = ProjectGenerator(config)
    if args.dry_run:
        print_plan(generator.plan(context))
        return

    result = asyncio.run(generator.generate(context))
    print_result(result, context)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``goforge`` and ``python -m goforge``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        run_init(args)
    except ScaffoldError as exc:
        report_error(exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
