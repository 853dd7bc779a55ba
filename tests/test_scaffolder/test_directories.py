"""Tests for the directory planner."""

from __future__ import annotations

from pathlib import Path

import pytest

from goforge.errors import DirectoryCreationError
from goforge.scaffolder.catalog import DIRECTORY_CATALOG
from goforge.scaffolder.directories import DirectoryPlanner

pytestmark = pytest.mark.unit


def _tree(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_dir()}


def _expected_tree(catalog) -> set[str]:
    expected: set[str] = set()
    for rel in catalog:
        parts = rel.split("/")
        for i in range(1, len(parts) + 1):
            expected.add("/".join(parts[:i]))
    return expected


class TestDirectoryPlanner:
    def test_creates_full_catalog(self, tmp_path: Path):
        root = tmp_path / "demo"
        DirectoryPlanner().create(root)
        assert _tree(root) == _expected_tree(DIRECTORY_CATALOG)

    def test_returns_paths_in_catalog_order(self, tmp_path: Path):
        created = DirectoryPlanner(("b", "a/x")).create(tmp_path / "p")
        assert created == [tmp_path / "p" / "b", tmp_path / "p" / "a" / "x"]

    def test_idempotent(self, tmp_path: Path):
        root = tmp_path / "demo"
        planner = DirectoryPlanner()
        planner.create(root)
        planner.create(root)
        assert _tree(root) == _expected_tree(DIRECTORY_CATALOG)

    def test_plan_has_no_side_effects(self, tmp_path: Path):
        planned = DirectoryPlanner().plan(tmp_path / "demo")
        assert len(planned) == len(DIRECTORY_CATALOG)
        assert not (tmp_path / "demo").exists()

    def test_file_in_the_way(self, tmp_path: Path):
        root = tmp_path / "demo"
        root.mkdir()
        (root / "cmd").write_text("not a directory", encoding="utf-8")

        with pytest.raises(DirectoryCreationError) as exc_info:
            DirectoryPlanner(("docs", "cmd/api", "logs")).create(root)

        assert exc_info.value.path == root / "cmd" / "api"
        assert isinstance(exc_info.value.cause, OSError)
        # Earlier directories stay, later ones are never attempted.
        assert (root / "docs").is_dir()
        assert not (root / "logs").exists()

    def test_error_step_label(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(DirectoryCreationError) as exc_info:
            DirectoryPlanner(("a",)).create(blocker)
        assert exc_info.value.step == "create directories"
