"""APT package probe.

Answers presence, installed version and candidate version questions
for individual packages using dpkg-query, apt-cache and apt.
"""

import logging
import re

from stackctl.utils.shell import command_exists, probe_output

logger = logging.getLogger(__name__)


class AptProbe:
    """Read-only queries against the dpkg database and APT cache.

    A package counts as installed only in the "ii" state (desired
    install, status installed), matching ``dpkg -l``.

    Example:
        >>> probe = AptProbe()
        >>> probe.installed_version("amdgpu-dkms")
        '1:6.16.6.30100100-2212064.24.04'
    """

    # dpkg-query format string: status abbreviation, version
    _DPKG_FORMAT = "${db:Status-Abbrev}\\t${Version}\\n"

    def is_available(self) -> bool:
        """Check if dpkg-query and apt-cache are available."""
        return command_exists("dpkg-query") and command_exists("apt-cache")

    def installed_version(self, package: str) -> str | None:
        """Get the installed version of a package.

        Args:
            package: Package name.

        Returns:
            Version string, or None if the package is not installed.
        """
        output = probe_output(["dpkg-query", "-W", "-f", self._DPKG_FORMAT, package])
        if not output:
            return None

        status, _, version = output.splitlines()[0].partition("\t")
        version = version.strip()
        if not status.startswith("ii") or not version:
            logger.debug("Package %s not installed (status=%r)", package, status)
            return None
        return version

    def is_installed(self, package: str) -> bool:
        """Check if a package is installed."""
        return self.installed_version(package) is not None

    def candidate_version(self, package: str) -> str:
        """Get the candidate version APT would install.

        Args:
            package: Package name.

        Returns:
            Candidate version, or an empty string if there is none.
        """
        output = probe_output(["apt-cache", "policy", package])
        if not output:
            return ""

        for line in output.splitlines():
            line = line.strip()
            if line.startswith("Candidate:"):
                value = line.split(":", 1)[1].strip()
                return "" if value == "(none)" else value
        return ""

    def upgradable(self, pattern: str) -> str:
        """Find an upgradable package whose line matches a pattern.

        Args:
            pattern: Regex matched case-insensitively against each line of
                ``apt list --upgradable``.

        Returns:
            Candidate version of the first match, or an empty string if
            nothing matching is upgradable.
        """
        output = probe_output(["apt", "list", "--upgradable"], timeout=60.0)
        if not output:
            return ""

        regex = re.compile(pattern, re.IGNORECASE)
        for line in output.splitlines():
            # "Listing..." header and warnings carry no package/suite pair
            if "/" not in line or not regex.search(line):
                continue
            parts = line.split()
            return parts[1] if len(parts) > 1 else line.strip()
        return ""
