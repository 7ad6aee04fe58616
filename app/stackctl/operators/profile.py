"""Shell profile operator implementation.

Appends environment exports to the user's shell profile. Appends are
guarded by presence checks so repeated runs never duplicate lines.
"""

import logging
import os
from pathlib import Path

from stackctl.operators.base import Operator
from stackctl.probes.profile import ShellProfile, export_line

logger = logging.getLogger(__name__)


class ProfileOperator(Operator):
    """Edits a shell profile file.

    Attributes:
        path: Profile location.
    """

    def __init__(self, path: Path, dry_run: bool = False) -> None:
        super().__init__(dry_run=dry_run)
        self.path = path
        self._profile = ShellProfile(path)

    def ensure_block(self, sentinel: str, lines: list[str]) -> bool:
        """Append a block unless its sentinel is already present.

        Args:
            sentinel: Comment prefix identifying the block.
            lines: Block lines to append.

        Returns:
            True if the block was appended.
        """
        if self._profile.has_sentinel(sentinel):
            return False
        self._append(lines)
        return True

    def ensure_exports(self, env: dict[str, str]) -> list[str]:
        """Append exports that are not present verbatim.

        Returns:
            Keys of the exports that were appended.
        """
        missing = self._profile.missing_exports(env)
        if missing:
            self._append([export_line(key, value) for key, value in missing.items()])
        return list(missing)

    def apply_to_process(self, env: dict[str, str]) -> None:
        """Apply exports to the current process environment.

        Values are expanded against the current environment, so
        ``$PATH:/opt/rocm/bin`` extends the existing PATH.
        """
        if self.dry_run:
            logger.info("[dry-run] export %s", ", ".join(env))
            return
        for key, value in env.items():
            os.environ[key] = os.path.expandvars(value)

    def _append(self, lines: list[str]) -> None:
        if self.dry_run:
            logger.info("[dry-run] append %d line(s) to %s", len(lines), self.path)
            return

        existing = self.path.read_text(encoding="utf-8") if self.path.exists() else ""
        prefix = "\n" if existing and not existing.endswith("\n") else ""
        with self.path.open("a", encoding="utf-8") as f:
            f.write(prefix + "\n".join(lines) + "\n")
        logger.info("Appended %d line(s) to %s", len(lines), self.path)
