"""Directory skeleton creation."""

from __future__ import annotations

from pathlib import Path

from goforge.errors import DirectoryCreationError
from goforge.scaffolder.catalog import DIRECTORY_CATALOG
from goforge.utils import print_step


class DirectoryPlanner:
    """Creates the project directory skeleton from a directory catalog."""

    def __init__(self, catalog: tuple[str, ...] = DIRECTORY_CATALOG) -> None:
        self.catalog = tuple(catalog)

    def plan(self, root: Path) -> list[Path]:
        """Return the absolute directories :meth:`create` would make, in order."""
        return [Path(root) / rel for rel in self.catalog]

    def create(self, root: Path) -> list[Path]:
        """Create *root* and every catalog directory beneath it.

        Existing directories are left alone.  The first ``OSError`` aborts
        the run; directories created before it are not removed.

        Raises:
            DirectoryCreationError: If any directory cannot be created.
        """
        print_step("Creating directory structure...")
        root = Path(root)
        _mkdir(root)

        created: list[Path] = []
        for path in self.plan(root):
            _mkdir(path)
            created.append(path)
        return created


def _mkdir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationError(path, exc) from exc
