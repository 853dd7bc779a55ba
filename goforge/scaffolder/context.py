"""Template context resolution.

Turns the raw strings collected by the CLI into a validated, immutable
``TemplateContext``.  Backend-specific values (driver package, import path,
connection string) are derived from the database selector through a single
profile table and are never set any other way.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, computed_field

from goforge.errors import InvalidInputError


class DatabaseBackend(str, Enum):
    """Database backends a generated project can be wired for."""

    POSTGRESQL = "PostgreSQL"
    MYSQL = "MySQL"
    NONE = "None"

    @classmethod
    def parse(cls, value: str | "DatabaseBackend") -> "DatabaseBackend":
        """Parse a user-supplied selector, case-insensitively.

        Raises:
            InvalidInputError: If *value* names no known backend.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        backend = _BACKEND_ALIASES.get(key)
        if backend is None:
            choices = ", ".join(b.value for b in cls)
            raise InvalidInputError(
                f"Unknown database {value!r} (choose one of: {choices})"
            )
        return backend


_BACKEND_ALIASES: dict[str, DatabaseBackend] = {
    "postgresql": DatabaseBackend.POSTGRESQL,
    "postgres": DatabaseBackend.POSTGRESQL,
    "mysql": DatabaseBackend.MYSQL,
    "none": DatabaseBackend.NONE,
    "other": DatabaseBackend.NONE,
    "other (manual install)": DatabaseBackend.NONE,
}


# ---------------------------------------------------------------------------
# Backend profiles
# ---------------------------------------------------------------------------

POSTGRES_DSN = (
    "host=localhost user=your_user password=your_password "
    "dbname=your_dbname port=5432 sslmode=disable"
)
MYSQL_DSN = (
    "your_user:your_password@tcp(127.0.0.1:3306)/your_dbname"
    "?charset=utf8mb4&parseTime=True&loc=Local"
)


class BackendProfile(BaseModel):
    """Values derived from a ``DatabaseBackend``."""

    model_config = ConfigDict(frozen=True)

    driver: str
    driver_import: str
    dsn: str


# A project without a driver still gets a PostgreSQL-shaped DSN so the
# config file has something sensible to edit.
BACKEND_PROFILES: dict[DatabaseBackend, BackendProfile] = {
    DatabaseBackend.POSTGRESQL: BackendProfile(
        driver="postgres", driver_import="gorm.io/driver/postgres", dsn=POSTGRES_DSN
    ),
    DatabaseBackend.MYSQL: BackendProfile(
        driver="mysql", driver_import="gorm.io/driver/mysql", dsn=MYSQL_DSN
    ),
    DatabaseBackend.NONE: BackendProfile(driver="", driver_import="", dsn=POSTGRES_DSN),
}


# ---------------------------------------------------------------------------
# TemplateContext
# ---------------------------------------------------------------------------


class TemplateContext(BaseModel):
    """Resolved substitution values used to render every template."""

    model_config = ConfigDict(frozen=True)

    project_name: str
    module_path: str
    database: DatabaseBackend

    @computed_field  # type: ignore[prop-decorator]
    @property
    def driver(self) -> str:
        return BACKEND_PROFILES[self.database].driver

    @computed_field  # type: ignore[prop-decorator]
    @property
    def driver_import(self) -> str:
        return BACKEND_PROFILES[self.database].driver_import

    @computed_field  # type: ignore[prop-decorator]
    @property
    def dsn(self) -> str:
        return BACKEND_PROFILES[self.database].dsn

    def template_vars(self) -> dict[str, Any]:
        """Return the flat mapping templates are rendered against."""
        data = self.model_dump()
        data["database"] = self.database.value
        return data


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

_INVALID_SEGMENT = re.compile(r"[/\\\x00]")


def default_module_path(project_name: str) -> str:
    """Return the module path suggested when the user gives none."""
    return f"github.com/your-username/{project_name}"


def resolve_context(
    project_name: str,
    module_path: str | None,
    database: str | DatabaseBackend,
    output_dir: str | Path = ".",
) -> TemplateContext:
    """Validate raw input and build a ``TemplateContext``.

    Args:
        project_name: Name of the project directory to create.
        module_path: Go module path; ``None`` selects
            :func:`default_module_path`.
        database: Backend selector (see :meth:`DatabaseBackend.parse`).
        output_dir: Directory the project folder will be created in.  Only
            inspected, never modified.

    Raises:
        InvalidInputError: On an empty or malformed project name, an existing
            non-empty target, a malformed module path, or an unknown backend.
    """
    name = (project_name or "").strip()
    if not name:
        raise InvalidInputError("Project name must not be empty")
    if name in (".", "..") or _INVALID_SEGMENT.search(name):
        raise InvalidInputError(
            f"Project name {name!r} is not a valid directory name"
        )

    target = Path(output_dir) / name
    if target.exists():
        if not target.is_dir():
            raise InvalidInputError(f"{target} already exists and is not a directory")
        if any(target.iterdir()):
            raise InvalidInputError(f"Directory {target} already exists and is not empty")

    module = default_module_path(name) if module_path is None else module_path.strip()
    if not module:
        raise InvalidInputError("Module path must not be empty")
    if any(ch.isspace() for ch in module):
        raise InvalidInputError(f"Module path {module!r} must not contain whitespace")

    backend = DatabaseBackend.parse(database)
    return TemplateContext(project_name=name, module_path=module, database=backend)
