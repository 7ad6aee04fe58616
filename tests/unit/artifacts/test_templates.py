"""Unit tests for artifact templates."""

from stackctl.artifacts.templates import (
    launch_script_name,
    render_desktop_entry,
    render_launch_script,
    render_profile_block,
    render_update_script,
    update_script_name,
)
from stackctl.core.config import StackConfig


class TestNames:
    """Tests for script file names."""

    def test_names(self, config: StackConfig) -> None:
        """Names derive from the lowercase application name."""
        assert launch_script_name(config) == "run_comfyui.sh"
        assert launch_script_name(config, low_vram=True) == "run_comfyui_lowvram.sh"
        assert update_script_name(config) == "update_comfyui.sh"


class TestLaunchScript:
    """Tests for render_launch_script function."""

    def test_standard(self, config: StackConfig) -> None:
        """The standard script exports the environment and starts the app."""
        script = render_launch_script(config)
        lines = script.splitlines()

        assert lines[0] == "#!/bin/bash"
        assert "export HSA_OVERRIDE_GFX_VERSION=12.0.0" in lines
        assert f"source {config.venv_path / 'bin' / 'activate'}" in lines
        assert lines[-1] == 'python main.py --use-pytorch-cross-attention "$@"'
        assert script.endswith("\n")

    def test_low_vram(self, config: StackConfig) -> None:
        """The low VRAM variant adds --lowvram."""
        script = render_launch_script(config, low_vram=True)
        assert script.splitlines()[-1] == (
            'python main.py --lowvram --use-pytorch-cross-attention "$@"'
        )
        assert "Low VRAM mode" in script

    def test_no_flags(self, config: StackConfig) -> None:
        """Without launch flags only the pass-through arguments remain."""
        config.launch_flags = []
        assert render_launch_script(config).splitlines()[-1] == 'python main.py "$@"'

    def test_deterministic(self, config: StackConfig) -> None:
        """Rendering twice yields identical text."""
        assert render_launch_script(config) == render_launch_script(config)


class TestUpdateScript:
    """Tests for render_update_script function."""

    def test_content(self, config: StackConfig) -> None:
        """The update script pulls both checkouts and upgrades packages."""
        script = render_update_script(config)
        assert "set -e" in script
        assert "git pull origin master || git pull origin main" in script
        assert "git pull origin main || git pull origin master" in script
        assert "install --upgrade --pre torch torchvision torchaudio --index-url" in script


class TestDesktopEntry:
    """Tests for render_desktop_entry function."""

    def test_content(self, config: StackConfig) -> None:
        """The entry runs the standard launch script in a terminal."""
        entry = render_desktop_entry(config)
        assert entry.startswith("[Desktop Entry]\n")
        assert "Name=ComfyUI" in entry
        assert "Terminal=true" in entry
        assert str(config.app_dir / "run_comfyui.sh") in entry


class TestProfileBlock:
    """Tests for render_profile_block function."""

    def test_full_block(self, config: StackConfig) -> None:
        """The block starts blank, then the sentinel, then every export."""
        block = render_profile_block(config)
        assert block[0] == ""
        assert block[1] == "# ROCm Environment (Added by stackctl)"
        assert len(block) == 2 + len(config.env)

    def test_subset(self, config: StackConfig) -> None:
        """Only the given exports are rendered."""
        block = render_profile_block(config, env={"HIP_VISIBLE_DEVICES": "0"})
        assert block[2:] == ["export HIP_VISIBLE_DEVICES=0"]
