"""Host identity and hardware probes.

Read-only queries for OS release, display adapters, the invoking user
and its group membership.
"""

import getpass
import logging
import os
import platform
import re
from dataclasses import dataclass
from pathlib import Path

from stackctl.utils.shell import probe_output

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")

_DISPLAY_CLASS = re.compile(r"VGA|Display", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class OsRelease:
    """Parsed subset of /etc/os-release.

    Attributes:
        id: Distribution identifier (e.g. "ubuntu").
        version_id: Release version (e.g. "24.04").
        pretty_name: Human-readable name.
    """

    id: str
    version_id: str
    pretty_name: str


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def read_os_release(path: Path = OS_RELEASE_PATH) -> OsRelease | None:
    """Read the OS release file.

    Args:
        path: Location of the os-release file.

    Returns:
        OsRelease, or None if the file is missing or unreadable.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return None

    fields: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        fields[key.strip()] = _unquote(value)

    return OsRelease(
        id=fields.get("ID", ""),
        version_id=fields.get("VERSION_ID", ""),
        pretty_name=fields.get("PRETTY_NAME", fields.get("NAME", "")),
    )


def detect_gpu(vendor_pattern: str) -> str | None:
    """Find display adapters from a vendor via lspci.

    Args:
        vendor_pattern: Regex matched case-insensitively against each
            VGA/Display line.

    Returns:
        Matching lspci lines joined by "; ", or None if none match or
        lspci is unavailable.
    """
    output = probe_output(["lspci"])
    if output is None:
        logger.debug("lspci unavailable, cannot detect GPU")
        return None

    vendor = re.compile(vendor_pattern, re.IGNORECASE)
    matches = [
        line.strip()
        for line in output.splitlines()
        if _DISPLAY_CLASS.search(line) and vendor.search(line)
    ]
    return "; ".join(matches) if matches else None


def current_user() -> str:
    """Name of the user the stack is provisioned for."""
    return os.environ.get("USER") or getpass.getuser()


def user_groups(user: str) -> set[str]:
    """Groups the user belongs to according to the group database.

    Reads the database rather than the current process credentials so a
    membership added earlier in the run is already visible.

    Args:
        user: User name.

    Returns:
        Set of group names; empty if the lookup fails.
    """
    output = probe_output(["id", "-nG", user])
    if output is None:
        return set()
    return set(output.split())


def kernel_release() -> str:
    """Running kernel release, as in ``uname -r``."""
    return platform.release()
