"""Unit tests for the artifact generator."""

import os
import stat

import pytest
from stackctl.artifacts.generator import SCRIPT_MODE, ArtifactGenerator
from stackctl.core.config import StackConfig
from stackctl.models.component import Health
from stackctl.models.outcome import OutcomeKind, RunContext


@pytest.fixture
def generator(config: StackConfig) -> ArtifactGenerator:
    """Generator writing under tmp_path."""
    return ArtifactGenerator(config)


class TestCreateDirectories:
    """Tests for ArtifactGenerator.create_directories."""

    def test_creates_missing(self, generator: ArtifactGenerator, config: StackConfig) -> None:
        """Missing directories are created and recorded as installed."""
        ctx = RunContext()
        outcome = generator.create_directories(ctx)

        assert outcome.kind == OutcomeKind.INSTALLED
        assert outcome.description == "Model directories"
        assert all((config.app_dir / name).is_dir() for name in config.model_dirs)

    def test_all_present_skips(self, generator: ArtifactGenerator, config: StackConfig) -> None:
        """Existing directories are left alone."""
        for name in config.model_dirs:
            (config.app_dir / name).mkdir(parents=True)
        marker = config.app_dir / "models" / "checkpoints" / "model.safetensors"
        marker.write_text("weights")

        outcome = generator.create_directories(RunContext())
        assert outcome.kind == OutcomeKind.SKIPPED
        assert marker.read_text() == "weights"

    def test_partial_layout(self, generator: ArtifactGenerator, config: StackConfig) -> None:
        """A single missing directory still counts as an install."""
        for name in config.model_dirs[1:]:
            (config.app_dir / name).mkdir(parents=True)
        assert generator.missing_directories() == [config.app_dir / config.model_dirs[0]]
        assert generator.create_directories(RunContext()).kind == OutcomeKind.INSTALLED


class TestWriteScripts:
    """Tests for ArtifactGenerator.write_scripts."""

    def test_first_write(self, generator: ArtifactGenerator, config: StackConfig) -> None:
        """Scripts are written executable; the desktop entry is not."""
        outcome = generator.write_scripts(RunContext())
        assert outcome.kind == OutcomeKind.INSTALLED

        for name in ("run_comfyui.sh", "run_comfyui_lowvram.sh", "update_comfyui.sh"):
            mode = stat.S_IMODE((config.app_dir / name).stat().st_mode)
            assert mode == SCRIPT_MODE
        assert config.desktop_entry_path.is_file()
        assert not os.access(config.desktop_entry_path, os.X_OK)

    def test_rerun_is_byte_identical(self, generator: ArtifactGenerator) -> None:
        """A second run rewrites identical content and counts as skipped."""
        generator.write_scripts(RunContext())
        before = {a.path: a.path.read_bytes() for a in generator.artifacts()}

        outcome = generator.write_scripts(RunContext())
        after = {a.path: a.path.read_bytes() for a in generator.artifacts()}

        assert outcome.kind == OutcomeKind.SKIPPED
        assert outcome.description == "Launch scripts (regenerated)"
        assert before == after

    def test_overwrites_edits(self, generator: ArtifactGenerator, config: StackConfig) -> None:
        """Local edits are replaced by the rendered content."""
        generator.write_scripts(RunContext())
        script = config.app_dir / "run_comfyui.sh"
        script.write_text("#!/bin/bash\necho edited\n")

        generator.write_scripts(RunContext())
        assert "echo edited" not in script.read_text()


class TestRun:
    """Tests for ArtifactGenerator.run."""

    def test_fresh_app_dir(self, generator: ArtifactGenerator, config: StackConfig) -> None:
        """An empty application directory gets directories and scripts."""
        config.app_dir.mkdir()
        ctx = generator.run(RunContext())

        assert [o.description for o in ctx.installed] == ["Model directories", "Launch scripts"]
        assert ctx.reboot_required is False

    def test_second_run_changes_nothing(self, generator: ArtifactGenerator) -> None:
        """A rerun records only skipped outcomes."""
        generator.run(RunContext())
        ctx = generator.run(RunContext())
        assert not ctx.changed
        assert len(ctx.skipped) == 2

    def test_dry_run_writes_nothing(self, config: StackConfig) -> None:
        """Dry-run creates no directories or files but still reports."""
        ctx = ArtifactGenerator(config, dry_run=True).run(RunContext(dry_run=True))
        assert not config.app_dir.exists()
        assert not config.desktop_entry_path.exists()
        assert ctx.total == 2


class TestStatusRows:
    """Tests for ArtifactGenerator.status_rows."""

    def test_missing_then_ok(self, generator: ArtifactGenerator) -> None:
        """Rows reflect the layout on disk."""
        dirs, scripts = generator.status_rows()
        assert dirs.health == Health.MISSING
        assert scripts.health == Health.MISSING

        generator.run(RunContext())
        dirs, scripts = generator.status_rows()
        assert dirs.health == Health.OK
        assert scripts.health == Health.OK
