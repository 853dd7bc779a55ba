"""Post-generation build steps.

After every file exists, the new project still needs its Go dependencies
fetched and its dependency-injection code generated.  Both are opaque
external commands run in the project root: a step succeeds when its process
exits with status zero, and anything else stops the pipeline.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from goforge.errors import ExternalToolError
from goforge.scaffolder.context import TemplateContext
from goforge.utils import print_detail, print_step, print_success, run_command

BASE_DEPENDENCIES: tuple[str, ...] = (
    "github.com/gin-gonic/gin",
    "github.com/spf13/viper",
    "gorm.io/gorm",
    "github.com/google/wire/cmd/wire",
    "github.com/stretchr/testify",
    "github.com/vektra/mockery/v2/...@latest",
)

FETCH_DEPENDENCIES = "Installing dependencies (go get)"
GENERATE_CODE = "Generating dependency injection code (go generate)"


class GenerationStep(BaseModel):
    """One external command run inside the project root.

    ``phase`` groups steps for progress output; ``name`` identifies the step
    in diagnostics.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    phase: str
    command: tuple[str, ...]
    cwd: Path


def dependency_spec(context: TemplateContext) -> list[str]:
    """Return the packages to fetch: the static set, then the backend driver."""
    packages = list(BASE_DEPENDENCIES)
    if context.driver_import:
        packages.append(context.driver_import)
    return packages


def build_steps(
    root: Path, context: TemplateContext, go_binary: str = "go"
) -> list[GenerationStep]:
    """Return the ordered build steps for a project rooted at *root*.

    One ``go get`` step per package, then a single ``go generate ./...``.
    """
    steps = [
        GenerationStep(
            name=f"go get {pkg}",
            phase=FETCH_DEPENDENCIES,
            command=(go_binary, "get", pkg),
            cwd=Path(root),
        )
        for pkg in dependency_spec(context)
    ]
    steps.append(
        GenerationStep(
            name="go generate",
            phase=GENERATE_CODE,
            command=(go_binary, "generate", "./..."),
            cwd=Path(root),
        )
    )
    return steps


class BuildOrchestrator:
    """Runs build steps strictly one after another.

    Each process is awaited to exit before the next starts; the first
    non-zero exit raises and no later step runs.  Nothing is retried.
    """

    def __init__(self, timeout: int = 600) -> None:
        self.timeout = timeout

    async def run(self, steps: list[GenerationStep]) -> list[GenerationStep]:
        """Execute *steps* in order.

        Returns:
            The steps that ran, all of them successful.

        Raises:
            ExternalToolError: On the first step that exits non-zero, times
                out, or whose executable cannot be started.
        """
        completed: list[GenerationStep] = []
        phase: str | None = None
        for step in steps:
            if step.phase != phase:
                phase = step.phase
                print_step(f"{phase}...")
            print_detail(step.name)
            await self.run_step(step)
            completed.append(step)
        print_success("Build steps completed.")
        return completed

    async def run_step(self, step: GenerationStep) -> str:
        """Run a single step and return its combined output."""
        try:
            returncode, output, _ = await run_command(
                list(step.command),
                cwd=step.cwd,
                timeout=self.timeout,
                merge_stderr=True,
            )
        except OSError as exc:
            raise ExternalToolError(step.name, str(exc), returncode=-1) from exc
        if returncode != 0:
            raise ExternalToolError(step.name, output, returncode=returncode)
        return output
