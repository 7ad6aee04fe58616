"""Outcome models for a convergence run.

This module defines the record produced for each processed component
and the run context that accumulates those records together with the
restart-required flag.
"""

from dataclasses import dataclass, field
from enum import Enum


class OutcomeKind(Enum):
    """What happened to a component during a run.

    Attributes:
        INSTALLED: The component was absent and has been installed.
        UPDATED: The component was present but stale and has been updated.
        SKIPPED: The component was already current; nothing was done.
    """

    INSTALLED = "installed"
    UPDATED = "updated"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class ActionOutcome:
    """Immutable record of the action taken for one component.

    Attributes:
        kind: Outcome kind.
        description: Human-readable description of the component / action.
        before: Version before an update (UPDATED only).
        after: Version after an update (UPDATED only).
    """

    kind: OutcomeKind
    description: str
    before: str | None = None
    after: str | None = None

    def __post_init__(self) -> None:
        """Validate outcome data after initialization."""
        if not self.description:
            msg = "Outcome description cannot be empty"
            raise ValueError(msg)
        if self.kind != OutcomeKind.UPDATED and (self.before or self.after):
            msg = f"Only updated outcomes carry a version pair, got {self.kind.value}"
            raise ValueError(msg)

    @property
    def label(self) -> str:
        """Summary line for this outcome."""
        if self.before is not None and self.after is not None:
            return f"{self.description}: {self.before} -> {self.after}"
        return self.description


def installed(description: str) -> ActionOutcome:
    """Create an INSTALLED outcome."""
    return ActionOutcome(kind=OutcomeKind.INSTALLED, description=description)


def updated(description: str, before: str | None = None, after: str | None = None) -> ActionOutcome:
    """Create an UPDATED outcome, optionally with a before/after pair."""
    return ActionOutcome(
        kind=OutcomeKind.UPDATED,
        description=description,
        before=before,
        after=after,
    )


def skipped(description: str) -> ActionOutcome:
    """Create a SKIPPED outcome."""
    return ActionOutcome(kind=OutcomeKind.SKIPPED, description=description)


@dataclass(slots=True)
class RunContext:
    """Mutable state of a single run.

    Owned by the top-level command and passed by reference into the
    engine and the artifact generator. Outcomes are only ever appended;
    the restart flag can only go from False to True.

    Attributes:
        dry_run: Whether operators simulate their commands.
    """

    dry_run: bool = False
    _installed: list[ActionOutcome] = field(default_factory=list)
    _updated: list[ActionOutcome] = field(default_factory=list)
    _skipped: list[ActionOutcome] = field(default_factory=list)
    _reboot_required: bool = False

    def record(self, outcome: ActionOutcome) -> None:
        """Append an outcome to the accumulator matching its kind."""
        if outcome.kind == OutcomeKind.INSTALLED:
            self._installed.append(outcome)
        elif outcome.kind == OutcomeKind.UPDATED:
            self._updated.append(outcome)
        else:
            self._skipped.append(outcome)

    def require_reboot(self) -> None:
        """Flag that a restart of the host is needed."""
        self._reboot_required = True

    @property
    def reboot_required(self) -> bool:
        """Check if a disruptive change happened during this run."""
        return self._reboot_required

    @property
    def installed(self) -> tuple[ActionOutcome, ...]:
        """Outcomes of components installed during this run, in order."""
        return tuple(self._installed)

    @property
    def updated(self) -> tuple[ActionOutcome, ...]:
        """Outcomes of components updated during this run, in order."""
        return tuple(self._updated)

    @property
    def skipped(self) -> tuple[ActionOutcome, ...]:
        """Outcomes of components left untouched during this run, in order."""
        return tuple(self._skipped)

    @property
    def changed(self) -> bool:
        """Check if anything was installed or updated."""
        return bool(self._installed or self._updated)

    @property
    def total(self) -> int:
        """Total number of recorded outcomes."""
        return len(self._installed) + len(self._updated) + len(self._skipped)
