"""ROCm runtime probe."""

import logging
from pathlib import Path

from stackctl.models.component import UNKNOWN

logger = logging.getLogger(__name__)

ROCM_ROOT = Path("/opt/rocm")


class RocmProbe:
    """Inspects an installed ROCm tree.

    Attributes:
        root: ROCm installation prefix.
    """

    # Version files, in lookup order
    _VERSION_FILES = (".info/version", "version")

    def __init__(self, root: Path = ROCM_ROOT) -> None:
        self.root = root

    def is_installed(self) -> bool:
        """Check for the ROCm prefix and its rocminfo binary."""
        return self.root.is_dir() and (self.root / "bin" / "rocminfo").is_file()

    def version(self) -> str:
        """Read the installed ROCm version.

        Returns:
            Version string, or "unknown" if no version file is readable.
        """
        for name in self._VERSION_FILES:
            path = self.root / name
            try:
                value = path.read_text(encoding="utf-8").strip()
            except OSError:
                continue
            if value:
                return value
        logger.debug("No ROCm version file under %s", self.root)
        return UNKNOWN
