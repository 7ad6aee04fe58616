"""Shell profile probe.

Reads the environment block a run appends to the user's shell profile.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def export_line(key: str, value: str) -> str:
    """Render one export statement."""
    return f"export {key}={value}"


class ShellProfile:
    """Read-only view of a shell profile file.

    Attributes:
        path: Profile location (e.g. ~/.bashrc).
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def lines(self) -> list[str]:
        """Stripped lines of the profile; empty if it does not exist."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.debug("Cannot read %s: %s", self.path, e)
            return []
        return [line.strip() for line in text.splitlines()]

    def has_sentinel(self, sentinel: str) -> bool:
        """Check if a line starts with the block sentinel comment."""
        return any(line.startswith(sentinel) for line in self.lines())

    def has_export(self, key: str) -> bool:
        """Check if the variable is exported, whatever its value."""
        prefix = f"export {key}="
        return any(line.startswith(prefix) for line in self.lines())

    def missing_exports(self, env: dict[str, str]) -> dict[str, str]:
        """Exports from env that are not present verbatim, in order."""
        present = set(self.lines())
        return {key: value for key, value in env.items() if export_line(key, value) not in present}
