"""Templates for generated launch scripts, desktop entry and profile block.

Every renderer is a pure function of the configuration, so rendering
twice yields identical text.
"""

import shlex

from stackctl.core.config import StackConfig
from stackctl.probes.profile import export_line

# Marker appended to the sentinel comment of the profile block
PROFILE_BLOCK_SUFFIX = "(Added by stackctl)"


def launch_script_name(config: StackConfig, low_vram: bool = False) -> str:
    """File name of a launch script, e.g. "run_comfyui_lowvram.sh"."""
    suffix = "_lowvram" if low_vram else ""
    return f"run_{config.app_name.lower()}{suffix}.sh"


def update_script_name(config: StackConfig) -> str:
    """File name of the update script, e.g. "update_comfyui.sh"."""
    return f"update_{config.app_name.lower()}.sh"


def _pull_fallback(branches: list[str]) -> str:
    return " || ".join(f"git pull origin {shlex.quote(branch)}" for branch in branches)


def render_launch_script(config: StackConfig, low_vram: bool = False) -> str:
    """Render a launch script.

    Args:
        config: Stack configuration.
        low_vram: Render the low VRAM variant.

    Returns:
        Script text.
    """
    flags = ["--lowvram", *config.launch_flags] if low_vram else list(config.launch_flags)
    mode = "Low VRAM mode" if low_vram else config.framework_label
    exports = [export_line(key, value) for key, value in config.env.items()]
    activate = shlex.quote(str(config.venv_path / "bin" / "activate"))

    lines = [
        "#!/bin/bash",
        "",
        f"# {config.app_name} launch script ({mode})",
        "",
        "# GPU runtime environment",
        *exports,
        "",
        'SCRIPT_DIR="$(cd "$(dirname "${BASH_SOURCE[0]}")" && pwd)"',
        'cd "$SCRIPT_DIR"',
        "",
        f"source {activate}",
        "",
        f'echo "Starting {config.app_name} ({mode})..."',
        f'echo "Access the web UI at: {config.web_url}"',
        'echo ""',
        "",
        " ".join(["python", "main.py", *flags, '"$@"']),
    ]
    return "\n".join(lines) + "\n"


def render_update_script(config: StackConfig) -> str:
    """Render the script that updates checkouts and Python packages."""
    pip = shlex.quote(str(config.venv_path / "bin" / "pip"))
    plugin_dir = shlex.quote(str(config.plugin_dir))
    torch = " ".join(config.torch_packages)

    lines = [
        "#!/bin/bash",
        "",
        f"# Update script for {config.app_name}",
        "",
        "set -e",
        "",
        'SCRIPT_DIR="$(cd "$(dirname "${BASH_SOURCE[0]}")" && pwd)"',
        'cd "$SCRIPT_DIR"',
        "",
        f'echo "=== Updating {config.app_name} ==="',
        _pull_fallback(config.app_branches),
        "",
        'echo ""',
        f'echo "=== Updating {config.plugin_dir_name} ==="',
        f"cd {plugin_dir}",
        _pull_fallback(config.plugin_branches),
        'cd "$SCRIPT_DIR"',
        "",
        'echo ""',
        'echo "=== Updating Python dependencies ==="',
        f"{pip} install --upgrade -r requirements.txt",
        "",
        'echo ""',
        f'echo "=== Updating {config.framework_label} ==="',
        f"{pip} install --upgrade --pre {torch} --index-url {shlex.quote(config.torch_index_url)}",
        "",
        'echo ""',
        'echo "=== Update complete! ==="',
    ]
    return "\n".join(lines) + "\n"


def render_desktop_entry(config: StackConfig) -> str:
    """Render the freedesktop launcher entry."""
    launch = config.app_dir / launch_script_name(config)
    command = f"cd {shlex.quote(str(config.app_dir))} && {shlex.quote(str(launch))}"
    lines = [
        "[Desktop Entry]",
        "Version=1.0",
        "Type=Application",
        f"Name={config.app_name}",
        f"Comment=Launch {config.app_name}",
        f"Exec=bash -c {shlex.quote(command)}",
        "Icon=applications-graphics",
        "Terminal=true",
        "Categories=Graphics;",
    ]
    return "\n".join(lines) + "\n"


def render_profile_block(config: StackConfig, env: dict[str, str] | None = None) -> list[str]:
    """Render the shell profile block: a blank line, the sentinel, the exports.

    Args:
        config: Stack configuration.
        env: Exports to include; defaults to every configured export.

    Returns:
        Block lines without trailing newlines.
    """
    exports = config.env if env is None else env
    return [
        "",
        f"{config.env_sentinel} {PROFILE_BLOCK_SUFFIX}",
        *(export_line(key, value) for key, value in exports.items()),
    ]
