"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class, which looks templates up in a read-only
bundle and renders them against a ``TemplateContext``.  The bundle is a Jinja2
loader handed in at construction: by default the ``.j2`` files shipped in
``goforge/scaffolder/templates/``, but any loader (a ``DictLoader`` of
fixtures, another directory) can stand in for it.

Placeholders are strict.  A template that references a name the context does
not define fails with ``UnresolvedPlaceholderError`` instead of rendering an
empty string.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
)

from goforge.errors import (
    InvalidTemplateError,
    TemplateNotFoundError,
    UnresolvedPlaceholderError,
)
from goforge.scaffolder.context import TemplateContext


# ---------------------------------------------------------------------------
# Template bundle discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


def bundled_loader(template_dir: str | Path | None = None) -> BaseLoader:
    """Return a loader over *template_dir*, or over the packaged bundle."""
    return FileSystemLoader(str(template_dir or _DEFAULT_TEMPLATE_DIR))


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders bundled Jinja2 templates for project scaffolding."""

    def __init__(self, loader: BaseLoader | None = None) -> None:
        self.loader = loader or bundled_loader()
        self.env = Environment(
            loader=self.loader,
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["slugify"] = _slugify_filter

    # -- Registry lookup ---------------------------------------------------

    def get_source(self, identifier: str) -> str:
        """Return the raw body of the template *identifier*.

        Raises:
            TemplateNotFoundError: If the bundle has no such template.
        """
        try:
            source, _filename, _uptodate = self.loader.get_source(self.env, identifier)
        except TemplateNotFound as exc:
            raise TemplateNotFoundError(identifier) from exc
        return source

    def list_templates(self) -> list[str]:
        """Return a sorted list of every template identifier in the bundle."""
        return sorted(self.loader.list_templates())

    # -- Rendering -----------------------------------------------------------

    def render(self, identifier: str, context: TemplateContext | dict[str, Any]) -> str:
        """Render the template *identifier* with *context*.

        Rendering is a pure function of the template body and the context:
        the same inputs always give the same text.

        Raises:
            TemplateNotFoundError: If the bundle has no such template.
            InvalidTemplateError: If the template body does not parse.
            UnresolvedPlaceholderError: If the template uses a name the
                context does not provide.
        """
        try:
            template = self.env.get_template(identifier)
        except TemplateNotFound as exc:
            raise TemplateNotFoundError(identifier) from exc
        except TemplateSyntaxError as exc:
            detail = exc.message or str(exc)
            raise InvalidTemplateError(identifier, detail, exc.lineno) from exc
        except UnicodeDecodeError as exc:
            raise InvalidTemplateError(identifier, f"not valid UTF-8 ({exc.reason})") from exc
        try:
            return template.render(**_as_vars(context))
        except UndefinedError as exc:
            raise UnresolvedPlaceholderError(identifier, str(exc)) from exc


def _as_vars(context: TemplateContext | dict[str, Any]) -> dict[str, Any]:
    if isinstance(context, TemplateContext):
        return context.template_vars()
    return dict(context)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------


def _slugify_filter(value: str) -> str:
    """Convert a string to a URL/filename-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")

