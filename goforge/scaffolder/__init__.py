"""goforge scaffolder -- generates Go service project skeletons.

The engine is a linear pipeline: a ``TemplateContext`` is resolved from user
input, the directory skeleton is created, every catalog template is rendered
into the new project, and finally the external build steps run.

Quick usage::

    from goforge.scaffolder import ProjectGenerator, resolve_context

    context = resolve_context("demo", "example.com/demo", "PostgreSQL")
    result = await ProjectGenerator().generate(context)
"""

from goforge.scaffolder.builder import BuildOrchestrator, GenerationStep, build_steps
from goforge.scaffolder.catalog import (
    DIRECTORY_CATALOG,
    TEMPLATE_CATALOG,
    TemplateCatalogEntry,
)
from goforge.scaffolder.context import DatabaseBackend, TemplateContext, resolve_context
from goforge.scaffolder.generator import GenerationResult, ProjectGenerator, ScaffoldPlan
from goforge.scaffolder.templates import TemplateRenderer

__all__ = [
    "DIRECTORY_CATALOG",
    "TEMPLATE_CATALOG",
    "BuildOrchestrator",
    "DatabaseBackend",
    "GenerationResult",
    "GenerationStep",
    "ProjectGenerator",
    "ScaffoldPlan",
    "TemplateCatalogEntry",
    "TemplateContext",
    "TemplateRenderer",
    "build_steps",
    "resolve_context",
]
