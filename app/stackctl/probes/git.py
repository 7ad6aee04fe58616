"""Git checkout probe.

Reads local and remote HEAD identifiers of a checkout. Fetching updates
remote-tracking refs only, which is tolerated as a probe side effect.
"""

import logging
import subprocess
from pathlib import Path

from stackctl.utils.shell import probe_output, run_command

logger = logging.getLogger(__name__)


class GitProbe:
    """Read-only queries against git checkouts."""

    _FETCH_TIMEOUT: float = 120.0

    def is_checkout(self, path: Path, marker: str | None = None) -> bool:
        """Check if a checkout directory is present.

        Args:
            path: Checkout directory.
            marker: Optional file that must exist inside the checkout.

        Returns:
            True if the directory (and marker, if given) exist.
        """
        if not path.is_dir():
            return False
        return marker is None or (path / marker).is_file()

    def local_head(self, path: Path) -> str | None:
        """Commit id of the checked-out HEAD, or None if unreadable."""
        return probe_output(["git", "rev-parse", "HEAD"], cwd=str(path)) or None

    def fetch(self, path: Path, remote: str = "origin") -> bool:
        """Refresh remote-tracking refs.

        Failures (offline, no remote) are logged and reported as False;
        the remote head then reflects the last successful fetch.

        Args:
            path: Checkout directory.
            remote: Remote name.

        Returns:
            True if the fetch succeeded.
        """
        try:
            result = run_command(
                ["git", "fetch", remote],
                timeout=self._FETCH_TIMEOUT,
                cwd=str(path),
            )
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            logger.debug("git fetch in %s failed: %s", path, e)
            return False
        if not result.success:
            logger.debug("git fetch in %s failed: %s", path, result.stderr.strip())
        return result.success

    def remote_head(
        self,
        path: Path,
        branches: list[str],
        remote: str = "origin",
    ) -> str | None:
        """Commit id of the first remote branch that resolves.

        Args:
            path: Checkout directory.
            branches: Branch names tried in order.
            remote: Remote name.

        Returns:
            Commit id, or None if no branch resolves.
        """
        for branch in branches:
            head = probe_output(["git", "rev-parse", f"{remote}/{branch}"], cwd=str(path))
            if head:
                return head
        return None
