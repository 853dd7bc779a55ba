"""Shared pytest fixtures for the goforge test suite.

Provides reusable fixtures for:
- Output directories and run configuration rooted in ``tmp_path``
- Resolved template contexts for each database backend
- In-memory template bundles
- A mocked ``run_command`` so no Go toolchain is needed
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from jinja2 import DictLoader

from goforge.config import BuildConfig, Config
from goforge.scaffolder.context import DatabaseBackend, TemplateContext
from goforge.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Paths & configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Directory generated projects are written into."""
    out = tmp_path / "out"
    out.mkdir()
    return out


@pytest.fixture
def config(output_dir: Path) -> Config:
    """Run configuration writing into ``output_dir``."""
    return Config(output_dir=output_dir, build=BuildConfig(step_timeout=30))


@pytest.fixture
def offline_config(output_dir: Path) -> Config:
    """Configuration that skips the external build steps."""
    return Config(output_dir=output_dir, build=BuildConfig(skip_build=True))


# ---------------------------------------------------------------------------
# Contexts
# ---------------------------------------------------------------------------


@pytest.fixture
def postgres_context() -> TemplateContext:
    return TemplateContext(
        project_name="demo",
        module_path="example.com/demo",
        database=DatabaseBackend.POSTGRESQL,
    )


@pytest.fixture
def mysql_context() -> TemplateContext:
    return TemplateContext(
        project_name="shop",
        module_path="github.com/acme/shop",
        database=DatabaseBackend.MYSQL,
    )


@pytest.fixture
def no_db_context() -> TemplateContext:
    return TemplateContext(
        project_name="bare",
        module_path="example.com/bare",
        database=DatabaseBackend.NONE,
    )


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


@pytest.fixture
def fixture_templates() -> dict[str, str]:
    """A tiny in-memory template bundle."""
    return {
        "mod.j2": "module {{ module_path }}\n",
        "conf.j2": 'dsn: "{{ dsn }}"\n',
        "bad.j2": "name: {{ not_a_field }}\n",
    }


@pytest.fixture
def fixture_renderer(fixture_templates: dict[str, str]) -> TemplateRenderer:
    return TemplateRenderer(DictLoader(fixture_templates))


@pytest.fixture
def bundled_renderer() -> TemplateRenderer:
    """Renderer over the templates shipped with the package."""
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Subprocess mocking
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_run_command():
    """Patch the build orchestrator's ``run_command`` to always succeed."""
    with patch(
        "goforge.scaffolder.builder.run_command",
        new_callable=AsyncMock,
        return_value=(0, "ok", ""),
    ) as mocked:
        yield mocked
