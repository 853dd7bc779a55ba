"""Fixed catalogs describing a generated project.

``DIRECTORY_CATALOG`` is the directory skeleton and ``TEMPLATE_CATALOG`` maps
each destination file to the template that renders it.  Both are ordered
tuples so every run creates and writes things in the same order, and a
failure always surfaces at the same entry.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict

DIRECTORY_CATALOG: tuple[str, ...] = (
    "cmd/api",
    "api/v1/handler",
    "api/v1/request",
    "api/v1/response",
    "internal/hello",
    "pkg/config",
    "pkg/database",
    "docs",
    "migrations",
    "logs",
)


class TemplateCatalogEntry(BaseModel):
    """A destination path (relative to the project root) and its template."""

    model_config = ConfigDict(frozen=True)

    destination: str
    template: str


def _entry(destination: str, template: str) -> TemplateCatalogEntry:
    return TemplateCatalogEntry(destination=destination, template=template)


TEMPLATE_CATALOG: tuple[TemplateCatalogEntry, ...] = (
    _entry("go.mod", "go.mod.j2"),
    _entry(".gitignore", "gitignore.j2"),
    _entry(".mockery.yaml", "mockery.yaml.j2"),
    _entry("README.md", "README.md.j2"),
    _entry("config.yaml", "config.yaml.j2"),
    _entry("cmd/api/main.go", "main.go.j2"),
    _entry("cmd/api/wire.go", "wire.go.j2"),
    _entry("pkg/config/config.go", "config.go.j2"),
    _entry("pkg/database/database.go", "database.go.j2"),
    _entry("api/v1/router.go", "router.go.j2"),
    _entry("api/v1/handler/hello.go", "hello_handler.go.j2"),
    _entry("api/v1/request/hello.go", "hello_request.go.j2"),
    _entry("api/v1/response/response.go", "response.go.j2"),
    _entry("internal/hello/service.go", "hello_service.go.j2"),
    _entry("internal/hello/repository.go", "hello_repository.go.j2"),
    _entry("docs/openapi.yaml", "openapi.yaml.j2"),
    _entry("migrations/.gitkeep", "gitkeep.j2"),
    _entry("logs/.gitkeep", "gitkeep.j2"),
)


def check_catalog(
    entries: tuple[TemplateCatalogEntry, ...] | list[TemplateCatalogEntry],
    directories: tuple[str, ...] | list[str],
) -> list[str]:
    """Return destinations whose parent directory the skeleton will not create.

    A parent is covered when it is the project root, a catalog directory, or
    an intermediate segment of one.  An empty result means the catalogs are
    consistent.
    """
    covered: set[PurePosixPath] = {PurePosixPath(".")}
    for directory in directories:
        path = PurePosixPath(directory)
        covered.add(path)
        covered.update(path.parents)

    return [
        entry.destination
        for entry in entries
        if PurePosixPath(entry.destination).parent not in covered
    ]
