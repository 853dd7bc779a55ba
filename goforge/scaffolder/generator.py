"""Main scaffolding orchestrator.

Takes a resolved ``TemplateContext`` and generates a Go service project:
the directory skeleton first, then every rendered file, then the external
build steps (``go get`` for each dependency, ``go generate``).  Each stage
runs to completion before the next begins and the first error aborts the
whole run.

A failed run leaves whatever it produced on disk for inspection.  Removing a
partially generated project is an explicit opt-in (``clean_on_failure``) and
only ever applies to a root directory this run created.
"""

from __future__ import annotations

import shutil
import time
from pathlib import Path

from pydantic import BaseModel

from goforge.config import Config
from goforge.errors import ScaffoldError
from goforge.scaffolder.builder import BuildOrchestrator, GenerationStep, build_steps
from goforge.scaffolder.catalog import (
    DIRECTORY_CATALOG,
    TEMPLATE_CATALOG,
    TemplateCatalogEntry,
)
from goforge.scaffolder.context import TemplateContext
from goforge.scaffolder.directories import DirectoryPlanner
from goforge.scaffolder.materializer import FileMaterializer
from goforge.scaffolder.templates import TemplateRenderer, bundled_loader
from goforge.utils import print_warning


class ScaffoldPlan(BaseModel):
    """Everything a run would do, computed without touching the filesystem."""

    root: Path
    directories: list[Path]
    files: list[Path]
    steps: list[GenerationStep]


class GenerationResult(BaseModel):
    """Outcome of a successful run."""

    root: Path
    directories: list[Path]
    files: list[Path]
    steps: list[GenerationStep]
    duration: float


class ProjectGenerator:
    """Runs the scaffolding pipeline for one project.

    The template bundle, directory catalog and template catalog are
    constructor arguments so tests can swap in fixtures.
    """

    def __init__(
        self,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
        orchestrator: BuildOrchestrator | None = None,
        directories: tuple[str, ...] = DIRECTORY_CATALOG,
        templates: tuple[TemplateCatalogEntry, ...] = TEMPLATE_CATALOG,
    ) -> None:
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer(
            bundled_loader(self.config.template_dir)
        )
        self.orchestrator = orchestrator or BuildOrchestrator(
            timeout=self.config.build.step_timeout
        )
        self.planner = DirectoryPlanner(directories)
        self.materializer = FileMaterializer(self.renderer, templates)

    # -- Public API --------------------------------------------------------

    def plan(self, context: TemplateContext) -> ScaffoldPlan:
        """Describe the run for *context* without side effects."""
        root = self.config.project_root(context.project_name)
        steps = [] if self.config.build.skip_build else self._steps(root, context)
        return ScaffoldPlan(
            root=root,
            directories=self.planner.plan(root),
            files=self.materializer.plan(root),
            steps=steps,
        )

    async def generate(self, context: TemplateContext) -> GenerationResult:
        """Generate the project described by *context*.

        Returns:
            A ``GenerationResult`` listing everything produced.

        Raises:
            ScaffoldError: Any stage failure.  Later stages never run.
        """
        started = time.monotonic()
        root = self.config.project_root(context.project_name)
        root_existed = root.exists()

        try:
            directories = self.planner.create(root)
            files = self.materializer.materialize(root, context)
            steps: list[GenerationStep] = []
            if not self.config.build.skip_build:
                steps = await self.orchestrator.run(self._steps(root, context))
        except ScaffoldError:
            if self.config.clean_on_failure and not root_existed:
                self._clean(root)
            raise

        return GenerationResult(
            root=root,
            directories=directories,
            files=files,
            steps=steps,
            duration=time.monotonic() - started,
        )

    # -- Internals -----------------------------------------------------------

    def _steps(self, root: Path, context: TemplateContext) -> list[GenerationStep]:
        return build_steps(root, context, go_binary=self.config.go_binary)

    def _clean(self, root: Path) -> None:
        print_warning(f"Removing partially generated project {root}")
        shutil.rmtree(root, ignore_errors=True)
