"""Rendering catalog entries to files inside the new project."""

from __future__ import annotations

from pathlib import Path

from goforge.errors import FileWriteError
from goforge.scaffolder.catalog import TEMPLATE_CATALOG, TemplateCatalogEntry
from goforge.scaffolder.context import TemplateContext
from goforge.scaffolder.templates import TemplateRenderer
from goforge.utils import print_detail, print_step


class FileMaterializer:
    """Renders every template catalog entry and writes it under a root.

    Entries are processed in catalog order.  The first failure aborts and
    files written earlier in the same run are left on disk.  Parent
    directories are expected to exist already (see ``DirectoryPlanner``).
    """

    def __init__(
        self,
        renderer: TemplateRenderer,
        catalog: tuple[TemplateCatalogEntry, ...] = TEMPLATE_CATALOG,
    ) -> None:
        self.renderer = renderer
        self.catalog = tuple(catalog)

    def plan(self, root: Path) -> list[Path]:
        """Return the files :meth:`materialize` would write, in order."""
        return [Path(root) / entry.destination for entry in self.catalog]

    def materialize(self, root: Path, context: TemplateContext) -> list[Path]:
        """Render and write every catalog entry.

        Returns:
            The written file paths, in catalog order.

        Raises:
            TemplateNotFoundError: A catalog entry names a missing template.
            UnresolvedPlaceholderError: A template uses an unknown placeholder.
            InvalidTemplateError: A template body does not parse.
            FileWriteError: A rendered file could not be written.
        """
        print_step("Creating boilerplate files...")
        written: list[Path] = []
        for entry in self.catalog:
            content = self.renderer.render(entry.template, context)
            path = Path(root) / entry.destination
            _write_file(path, content)
            print_detail(entry.destination)
            written.append(path)
        return written


def _write_file(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise FileWriteError(path, exc) from exc
