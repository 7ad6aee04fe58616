"""Artifact generator.

Writes launch scripts and the desktop entry by unconditional overwrite
and creates the model directory layout by presence-check-then-create.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from stackctl.artifacts.templates import (
    launch_script_name,
    render_desktop_entry,
    render_launch_script,
    render_update_script,
    update_script_name,
)
from stackctl.core.config import StackConfig
from stackctl.models.component import Health, StatusRow
from stackctl.models.outcome import ActionOutcome, RunContext, installed, skipped
from stackctl.utils.formatting import (
    print_check,
    print_header,
    print_skip,
    print_step,
    print_success,
)

logger = logging.getLogger(__name__)

SCRIPT_MODE = 0o755


@dataclass(frozen=True, slots=True)
class GeneratedArtifact:
    """A file whose whole content derives from the configuration.

    Attributes:
        path: Target location.
        content: Rendered text.
        executable: Set mode 0755 after writing.
    """

    path: Path
    content: str
    executable: bool = True


class ArtifactGenerator:
    """Generates the filesystem layout and scripts around the application.

    Attributes:
        config: Stack configuration.
        dry_run: If True, nothing is written.
    """

    def __init__(self, config: StackConfig, dry_run: bool = False) -> None:
        self.config = config
        self.dry_run = dry_run

    def artifacts(self) -> list[GeneratedArtifact]:
        """Every generated file, in write order."""
        app_dir = self.config.app_dir
        return [
            GeneratedArtifact(
                app_dir / launch_script_name(self.config),
                render_launch_script(self.config),
            ),
            GeneratedArtifact(
                app_dir / launch_script_name(self.config, low_vram=True),
                render_launch_script(self.config, low_vram=True),
            ),
            GeneratedArtifact(
                app_dir / update_script_name(self.config),
                render_update_script(self.config),
            ),
            GeneratedArtifact(
                self.config.desktop_entry_path,
                render_desktop_entry(self.config),
                executable=False,
            ),
        ]

    def missing_directories(self) -> list[Path]:
        """Configured directories that do not exist yet."""
        dirs = (self.config.app_dir / name for name in self.config.model_dirs)
        return [path for path in dirs if not path.is_dir()]

    def create_directories(self, ctx: RunContext) -> ActionOutcome:
        """Create missing model directories; existing ones are left alone.

        Args:
            ctx: Run context receiving the outcome.

        Returns:
            Installed "Model directories" if any directory was created,
            otherwise a skipped outcome.
        """
        print_header("Model Directories")
        missing = self.missing_directories()
        for path in missing:
            logger.info("Creating %s", path)
            if not self.dry_run:
                path.mkdir(parents=True, exist_ok=True)

        if missing:
            outcome = installed("Model directories")
            print_success("Model directories created!")
        else:
            outcome = skipped("Model directories (already exist)")
            print_skip("All model directories already exist")
        ctx.record(outcome)
        return outcome

    def write_scripts(self, ctx: RunContext) -> ActionOutcome:
        """Overwrite every generated file and mark scripts executable.

        Args:
            ctx: Run context receiving the outcome.

        Returns:
            Installed "Launch scripts" if any file was new, otherwise a
            skipped outcome since rewriting is content-identical.
        """
        print_header("Launch Scripts")
        artifacts = self.artifacts()
        existed = all(artifact.path.is_file() for artifact in artifacts)
        if existed:
            print_check("Launch scripts exist, regenerating...")

        print_step("Creating/updating launch scripts...")
        for artifact in artifacts:
            self._write(artifact)

        if existed:
            outcome = skipped("Launch scripts (regenerated)")
        else:
            outcome = installed("Launch scripts")
            print_success("Launch scripts created!")
        ctx.record(outcome)
        return outcome

    def run(self, ctx: RunContext) -> RunContext:
        """Create directories, then write scripts."""
        self.create_directories(ctx)
        self.write_scripts(ctx)
        return ctx

    def status_rows(self) -> list[StatusRow]:
        """Status table rows for the generated layout."""
        launcher = self.config.app_dir / launch_script_name(self.config)
        scripts = (
            StatusRow("Launch scripts", Health.OK)
            if launcher.is_file() and os.access(launcher, os.X_OK)
            else StatusRow("Launch scripts", Health.MISSING)
        )
        missing = len(self.missing_directories())
        total = len(self.config.model_dirs)
        if missing == 0:
            dirs = StatusRow("Model directories", Health.OK)
        elif missing == total:
            dirs = StatusRow("Model directories", Health.MISSING)
        else:
            dirs = StatusRow("Model directories", Health.PARTIAL, f"{missing} missing")
        return [dirs, scripts]

    def _write(self, artifact: GeneratedArtifact) -> None:
        if self.dry_run:
            logger.info("[dry-run] write %s", artifact.path)
            return
        artifact.path.parent.mkdir(parents=True, exist_ok=True)
        artifact.path.write_text(artifact.content, encoding="utf-8")
        if artifact.executable:
            artifact.path.chmod(SCRIPT_MODE)
        logger.info("Wrote %s", artifact.path)
