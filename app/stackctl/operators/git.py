"""Git operator implementation."""

import logging
from pathlib import Path

from stackctl.operators.base import Operator, OperatorError
from stackctl.utils.shell import command_exists

logger = logging.getLogger(__name__)


class GitOperator(Operator):
    """Clones and fast-forwards git checkouts."""

    def is_available(self) -> bool:
        """Check if git is available."""
        return command_exists("git")

    def clone(self, url: str, dest: Path) -> None:
        """Clone a repository.

        Args:
            url: Repository URL.
            dest: Target directory; its parent is created if needed.

        Raises:
            OperatorError: If git clone fails.
        """
        if not self.dry_run:
            dest.parent.mkdir(parents=True, exist_ok=True)
        self._execute(["git", "clone", url, str(dest)])

    def pull(self, path: Path, branches: list[str], remote: str = "origin") -> str:
        """Pull the first branch that succeeds.

        Args:
            path: Checkout directory.
            branches: Branch names tried in order.
            remote: Remote name.

        Returns:
            The branch that was pulled.

        Raises:
            ValueError: If branches is empty.
            OperatorError: If every branch fails; carries the last error.
        """
        if not branches:
            msg = "At least one branch is required"
            raise ValueError(msg)

        *fallbacks, last = branches
        for branch in fallbacks:
            try:
                self._execute(["git", "pull", remote, branch], cwd=str(path))
            except OperatorError as e:
                logger.debug("Pull of %s/%s in %s failed: %s", remote, branch, path, e)
                continue
            return branch

        self._execute(["git", "pull", remote, last], cwd=str(path))
        return last
