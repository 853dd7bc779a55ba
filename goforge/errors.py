"""Error taxonomy for the scaffolding engine.

Every failure the engine can produce derives from :class:`ScaffoldError`.
Stages never catch and continue past one of these; the CLI is the only
layer that turns them into a diagnostic and a non-zero exit status.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all scaffolding failures.

    Attributes:
        step: Short label of the pipeline step that failed, shown in
            diagnostics (e.g. ``"resolve context"`` or ``"go get gorm.io/gorm"``).
    """

    step: str = "scaffold"

    def __init__(self, message: str, *, step: str | None = None) -> None:
        if step is not None:
            self.step = step
        super().__init__(message)


class InvalidInputError(ScaffoldError):
    """Raised for bad or cancelled user input."""

    step = "resolve context"


class DirectoryCreationError(ScaffoldError):
    """Raised when a skeleton directory cannot be created."""

    step = "create directories"

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot create directory {self.path}: {cause}")


class TemplateNotFoundError(ScaffoldError):
    """Raised when the template bundle has no template with the given id."""

    step = "materialize files"

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Template not found in bundle: {identifier}")


class UnresolvedPlaceholderError(ScaffoldError):
    """Raised when a template references a placeholder the context lacks."""

    step = "materialize files"

    def __init__(self, identifier: str, detail: str) -> None:
        self.identifier = identifier
        self.detail = detail
        super().__init__(f"Unresolved placeholder in {identifier}: {detail}")


class InvalidTemplateError(ScaffoldError):
    """Raised when a bundled template cannot be parsed."""

    step = "materialize files"

    def __init__(self, identifier: str, detail: str, lineno: int | None = None) -> None:
        self.identifier = identifier
        self.detail = detail
        self.lineno = lineno
        where = f"{identifier}:{lineno}" if lineno else identifier
        super().__init__(f"Invalid template {where}: {detail}")


class FileWriteError(ScaffoldError):
    """Raised when a rendered file cannot be written."""

    step = "materialize files"

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot write file {self.path}: {cause}")


class ExternalToolError(ScaffoldError):
    """Raised when an external build step exits non-zero.

    Attributes:
        output: Combined stdout/stderr captured from the subprocess.
        returncode: Exit status (``-1`` for timeouts or a missing executable).
    """

    def __init__(self, step: str, output: str, returncode: int = 1) -> None:
        self.output = output
        self.returncode = returncode
        super().__init__(
            f"Failed to run '{step}' (exit status {returncode})", step=step
        )
