"""Unit tests for scripts command."""

from pathlib import Path
from unittest.mock import patch

import pytest
from stackctl.cli.main import app
from stackctl.core.config import StackConfig, save_config
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path, config: StackConfig) -> Path:
    """Config file pointing every location into tmp_path."""
    return save_config(config, tmp_path / "config.toml")


class TestScriptsCommand:
    """Tests for stackctl scripts command."""

    def test_generates(self, config_file: Path, config: StackConfig) -> None:
        """Scripts and directories are generated."""
        result = runner.invoke(app, ["--config", str(config_file), "scripts"])

        assert result.exit_code == 0
        assert (config.app_dir / "run_comfyui_lowvram.sh").is_file()
        assert (config.app_dir / "models" / "loras").is_dir()
        assert "INSTALLED:" in result.output

    def test_rerun_regenerates(self, config_file: Path) -> None:
        """A rerun reports the scripts as regenerated."""
        runner.invoke(app, ["--config", str(config_file), "scripts"])
        result = runner.invoke(app, ["--config", str(config_file), "scripts"])
        assert result.exit_code == 0
        assert "regenerated" in result.output

    def test_dry_run(self, config_file: Path, config: StackConfig) -> None:
        """Dry-run writes nothing."""
        result = runner.invoke(app, ["--config", str(config_file), "scripts", "--dry-run"])
        assert result.exit_code == 0
        assert "No files were written" in result.output
        assert not config.app_dir.exists()

    def test_write_error(self, config_file: Path) -> None:
        """Filesystem errors exit with code 1."""
        with patch(
            "stackctl.cli.commands.scripts.ArtifactGenerator.run",
            side_effect=PermissionError("denied"),
        ):
            result = runner.invoke(app, ["--config", str(config_file), "scripts"])
        assert result.exit_code == 1
