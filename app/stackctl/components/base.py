"""Abstract base class for managed components.

A component is one named unit of installable state. It knows how to
inspect the host, render a status row, and perform the transition the
Convergence Engine selects for the observed state.
"""

from abc import ABC, abstractmethod

from stackctl.core.config import StackConfig
from stackctl.models.component import (
    ComponentState,
    InstalledCurrent,
    InstalledStale,
    NotInstalled,
    StatusRow,
)
from stackctl.models.outcome import ActionOutcome, skipped


class Component(ABC):
    """Abstract base class for all components.

    Subclasses set ``name`` and ``title`` and implement inspect(),
    status() and install(). Versioned components also implement update().

    Attributes:
        name: Stable identifier (used in logs and tests).
        title: Human-readable name used in headers and outcomes.
        reboot_on_install: Installing touches disruptive host state.
        reboot_on_update: Updating touches disruptive host state.

    Example:
        >>> component = KernelDriver(config)
        >>> state = component.inspect()
        >>> if isinstance(state, NotInstalled):
        ...     outcome = component.install(state)
    """

    name: str
    title: str
    reboot_on_install: bool = False
    reboot_on_update: bool = False

    def __init__(self, config: StackConfig, dry_run: bool = False) -> None:
        """Initialize the component.

        Args:
            config: Stack configuration.
            dry_run: If True, operators only log their commands.
        """
        self.config = config
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if the component runs in dry-run mode."""
        return self._dry_run

    @abstractmethod
    def inspect(self) -> ComponentState:
        """Observe the component on the host.

        Called at action time, so the decision never relies on the
        earlier status snapshot. May refresh a package index.

        Returns:
            The observed state variant.
        """

    @abstractmethod
    def status(self) -> StatusRow:
        """Describe the component for the status table without side effects."""

    @abstractmethod
    def install(self, state: NotInstalled) -> ActionOutcome:
        """Install the component.

        Args:
            state: The observed absent state.

        Returns:
            An INSTALLED outcome.

        Raises:
            OperatorError: If an install command fails.
        """

    def update(self, state: InstalledStale) -> ActionOutcome:
        """Bring a stale component to the available version.

        Args:
            state: The observed stale state.

        Returns:
            An UPDATED outcome.

        Raises:
            OperatorError: If an update command fails.
        """
        msg = f"{self.title} does not support updates"
        raise NotImplementedError(msg)

    def skip(self, state: InstalledCurrent) -> ActionOutcome:
        """Record that nothing needs to be done."""
        return skipped(f"{self.title} (already up to date)")

    def finalize(self) -> None:
        """Hook run after every transition, whatever the state was."""
