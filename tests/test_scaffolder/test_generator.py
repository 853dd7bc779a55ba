"""Tests for the scaffolding pipeline.

Covers:
- Stage ordering (directories, files, build steps)
- Skipping the build stage
- Fail-fast behaviour and the no-rollback default
- Explicit clean-on-failure mode
- Dry-run planning
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from jinja2 import DictLoader

from goforge.config import Config
from goforge.errors import ExternalToolError, TemplateNotFoundError
from goforge.scaffolder.builder import BuildOrchestrator
from goforge.scaffolder.catalog import DIRECTORY_CATALOG, TEMPLATE_CATALOG, TemplateCatalogEntry
from goforge.scaffolder.generator import ProjectGenerator
from goforge.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


class TestGenerate:
    @pytest.mark.asyncio
    async def test_full_run(self, config: Config, postgres_context, mock_run_command):
        result = await ProjectGenerator(config).generate(postgres_context)

        root = config.output_dir / "demo"
        assert result.root == root
        assert len(result.directories) == len(DIRECTORY_CATALOG)
        assert result.files == [root / e.destination for e in TEMPLATE_CATALOG]
        assert all(p.is_file() for p in result.files)
        assert result.steps[-1].name == "go generate"
        assert mock_run_command.await_count == len(result.steps)
        assert result.duration >= 0

    @pytest.mark.asyncio
    async def test_build_runs_after_files_exist(self, config: Config, postgres_context):
        root = config.output_dir / "demo"
        seen: list[bool] = []

        async def fake_run(cmd, **kwargs):
            seen.append((root / "go.mod").is_file() and (root / "cmd/api/wire.go").is_file())
            return (0, "", "")

        with patch("goforge.scaffolder.builder.run_command", side_effect=fake_run):
            await ProjectGenerator(config).generate(postgres_context)

        assert seen and all(seen)

    @pytest.mark.asyncio
    async def test_skip_build(self, offline_config: Config, mysql_context, mock_run_command):
        result = await ProjectGenerator(offline_config).generate(mysql_context)
        assert result.steps == []
        mock_run_command.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_uses_injected_orchestrator(self, config: Config, postgres_context):
        orchestrator = BuildOrchestrator()
        orchestrator.run = AsyncMock(return_value=[])
        await ProjectGenerator(config, orchestrator=orchestrator).generate(postgres_context)
        orchestrator.run.assert_awaited_once()


class TestFailures:
    @pytest.mark.asyncio
    async def test_tool_failure_leaves_artifacts(self, config: Config, postgres_context):
        with patch(
            "goforge.scaffolder.builder.run_command",
            new_callable=AsyncMock,
            return_value=(1, "boom", ""),
        ):
            with pytest.raises(ExternalToolError):
                await ProjectGenerator(config).generate(postgres_context)

        assert (config.output_dir / "demo" / "go.mod").is_file()

    @pytest.mark.asyncio
    async def test_missing_template_aborts_before_build(
        self, config: Config, postgres_context, mock_run_command
    ):
        renderer = TemplateRenderer(DictLoader({"mod.j2": "module {{ module_path }}\n"}))
        templates = (
            TemplateCatalogEntry(destination="go.mod", template="mod.j2"),
            TemplateCatalogEntry(destination="config.yaml", template="missing.j2"),
        )
        generator = ProjectGenerator(config, renderer=renderer, templates=templates)

        with pytest.raises(TemplateNotFoundError):
            await generator.generate(postgres_context)

        mock_run_command.assert_not_awaited()
        assert (config.output_dir / "demo" / "go.mod").is_file()
        assert not (config.output_dir / "demo" / "config.yaml").exists()

    @pytest.mark.asyncio
    async def test_clean_on_failure_removes_new_root(self, config: Config, postgres_context):
        config.clean_on_failure = True
        with patch(
            "goforge.scaffolder.builder.run_command",
            new_callable=AsyncMock,
            return_value=(2, "fail", ""),
        ):
            with pytest.raises(ExternalToolError):
                await ProjectGenerator(config).generate(postgres_context)

        assert not (config.output_dir / "demo").exists()

    @pytest.mark.asyncio
    async def test_clean_on_failure_keeps_preexisting_root(self, config: Config, postgres_context):
        config.clean_on_failure = True
        root = config.output_dir / "demo"
        root.mkdir()
        with patch(
            "goforge.scaffolder.builder.run_command",
            new_callable=AsyncMock,
            return_value=(2, "fail", ""),
        ):
            with pytest.raises(ExternalToolError):
                await ProjectGenerator(config).generate(postgres_context)

        assert root.is_dir()


class TestPlan:
    def test_plan_touches_nothing(self, config: Config, postgres_context):
        plan = ProjectGenerator(config).plan(postgres_context)
        assert plan.root == config.output_dir / "demo"
        assert len(plan.directories) == len(DIRECTORY_CATALOG)
        assert len(plan.files) == len(TEMPLATE_CATALOG)
        assert plan.steps[-1].command == ("go", "generate", "./...")
        assert list(config.output_dir.iterdir()) == []

    def test_plan_without_build(self, offline_config: Config, postgres_context):
        assert ProjectGenerator(offline_config).plan(postgres_context).steps == []

    def test_template_dir_override(self, tmp_path: Path, postgres_context):
        bundle = tmp_path / "bundle"
        bundle.mkdir()
        (bundle / "go.mod.j2").write_text("module {{ module_path }} // custom\n", encoding="utf-8")
        config = Config(output_dir=tmp_path, template_dir=bundle)

        generator = ProjectGenerator(config)

        assert generator.renderer.render("go.mod.j2", postgres_context) == (
            "module example.com/demo // custom\n"
        )
