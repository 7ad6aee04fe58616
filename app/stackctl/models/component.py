"""Component state models.

The State Inspector reduces every managed component to one of three
variants. The Convergence Engine dispatches on the variant, so every
component goes through the same absent / current / stale decision.
"""

from dataclasses import dataclass
from enum import Enum

# Sentinels reported by probes when a value cannot be determined
NOT_INSTALLED = "not installed"
UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class NotInstalled:
    """The component is absent, or a required condition does not hold.

    Attributes:
        missing: Names of the missing pieces (packages, groups), if any.
    """

    missing: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class InstalledCurrent:
    """The component is present and matches the desired or latest version.

    Attributes:
        version: Observed version string (may be a sentinel).
    """

    version: str = UNKNOWN


@dataclass(frozen=True, slots=True)
class InstalledStale:
    """The component is present but the reported available version differs.

    Attributes:
        current: Observed installed version.
        available: Version reported as available.
    """

    current: str
    available: str


ComponentState = NotInstalled | InstalledCurrent | InstalledStale


def classify_version(current: str | None, available: str | None) -> ComponentState:
    """Classify a versioned component by plain string equality.

    No semantic version ordering is applied: "update available" means
    the available string differs from the installed one. An empty or
    missing available string never triggers an update.

    Args:
        current: Installed version, or None if not installed.
        available: Version reported by the package index.

    Returns:
        The matching ComponentState variant.
    """
    if current is None:
        return NotInstalled()
    if not available or available == current:
        return InstalledCurrent(version=current)
    return InstalledStale(current=current, available=available)


class Health(Enum):
    """Derived health of a component for the status table.

    Attributes:
        OK: Installed / configured.
        PARTIAL: Some of the required pieces are present.
        MISSING: Not installed.
        NEEDS_CONFIG: Present but configuration is incomplete.
    """

    OK = "ok"
    PARTIAL = "partial"
    MISSING = "missing"
    NEEDS_CONFIG = "needs_config"


@dataclass(frozen=True, slots=True)
class StatusRow:
    """One row of the pre-run status table.

    Attributes:
        title: Human-readable component name.
        health: Derived health.
        detail: Version or short note shown next to the health marker.
    """

    title: str
    health: Health
    detail: str | None = None

    @property
    def is_ok(self) -> bool:
        """Check if the component needs no attention."""
        return self.health == Health.OK
