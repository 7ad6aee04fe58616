"""APT operator implementation.

Installs and upgrades packages with apt-get, including one-off .deb
files downloaded from a vendor repository.
"""

import logging
from pathlib import Path

from stackctl.operators.base import Operator, OperatorError
from stackctl.utils.shell import command_exists

logger = logging.getLogger(__name__)


class AptOperator(Operator):
    """Operator for APT/dpkg packages.

    Requires sudo privileges for actual execution.

    Attributes:
        dry_run: If True, commands are only logged.
    """

    def is_available(self) -> bool:
        """Check if apt-get is available."""
        return command_exists("apt-get")

    def update_index(self) -> None:
        """Refresh the package index (apt-get update)."""
        self._execute(["sudo", "apt-get", "update"])

    def install(self, packages: list[str]) -> None:
        """Install packages using apt-get install.

        Args:
            packages: Package names to install. Empty list is a no-op.

        Raises:
            OperatorError: If apt-get fails.
        """
        if not packages:
            return
        self._execute(["sudo", "apt-get", "install", "-y", *packages])

    def upgrade(self, packages: list[str]) -> None:
        """Upgrade already-installed packages.

        Falls back to a plain install when --only-upgrade fails, which
        also pulls in newly required dependencies.

        Args:
            packages: Package names to upgrade.

        Raises:
            OperatorError: If both the upgrade and the fallback install fail.
        """
        if not packages:
            return
        try:
            self._execute(["sudo", "apt-get", "install", "-y", "--only-upgrade", *packages])
        except OperatorError as e:
            logger.warning("Upgrade of %s failed, retrying as install: %s", ", ".join(packages), e)
            self.install(packages)

    def install_deb(self, url: str, cache_dir: Path) -> Path:
        """Download a .deb package and install it with apt-get.

        Args:
            url: Package download URL.
            cache_dir: Directory to download into.

        Returns:
            Local path of the downloaded package.

        Raises:
            OperatorError: If the download or the install fails.
        """
        target = cache_dir / url.rsplit("/", 1)[-1]
        self._execute(["wget", "-q", "--show-progress", "-O", str(target), url])
        self._execute(["sudo", "apt-get", "install", "-y", str(target)])
        return target
