"""goforge configuration.

Typed configuration for the scaffolding engine. Settings use Pydantic v2
models so they can be validated at construction time and serialised to/from
JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}


class BuildConfig(BaseModel):
    """Tuning knobs for the post-generation build steps."""

    step_timeout: int = Field(
        default=600, ge=10, description="Per-step subprocess timeout in seconds"
    )
    skip_build: bool = Field(
        default=False,
        description="Skip dependency fetch and code generation entirely",
    )


class Config(BaseModel):
    """Global goforge configuration.

    Instances are created once by the CLI entry point (from defaults, the
    environment or a JSON file) and handed to ``ProjectGenerator``.
    """

    output_dir: Path = Field(default=Path("."))
    go_binary: str = Field(default="go", min_length=1)
    build: BuildConfig = Field(default_factory=BuildConfig)

    # Remove the project root after a failed run, but only when this run
    # created it.  Off by default so partial output stays for inspection.
    clean_on_failure: bool = Field(default=False)

    # Alternate template bundle directory; ``None`` uses the packaged bundle.
    template_dir: Path | None = Field(default=None)

    def project_root(self, project_name: str) -> Path:
        """Return the directory a project named *project_name* is written to."""
        return self.output_dir / project_name

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            GOFORGE_OUTPUT_DIR, GOFORGE_GO_BINARY, GOFORGE_STEP_TIMEOUT,
            GOFORGE_SKIP_BUILD, GOFORGE_CLEAN_ON_FAILURE, GOFORGE_TEMPLATE_DIR.
        """
        build_kwargs: dict[str, Any] = {}
        if os.environ.get("GOFORGE_STEP_TIMEOUT"):
            build_kwargs["step_timeout"] = int(os.environ["GOFORGE_STEP_TIMEOUT"])
        if os.environ.get("GOFORGE_SKIP_BUILD"):
            build_kwargs["skip_build"] = (
                os.environ["GOFORGE_SKIP_BUILD"].strip().lower() in _TRUTHY
            )

        template_dir = os.environ.get("GOFORGE_TEMPLATE_DIR")

        return cls(
            output_dir=Path(os.environ.get("GOFORGE_OUTPUT_DIR", ".")),
            go_binary=os.environ.get("GOFORGE_GO_BINARY", "go"),
            build=BuildConfig(**build_kwargs),
            clean_on_failure=(
                os.environ.get("GOFORGE_CLEAN_ON_FAILURE", "").strip().lower() in _TRUTHY
            ),
            template_dir=Path(template_dir) if template_dir else None,
        )
