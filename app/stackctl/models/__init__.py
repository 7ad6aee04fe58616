"""Data models for stackctl.

This module exports the core data structures used throughout the application.
"""

from stackctl.models.component import (
    NOT_INSTALLED,
    UNKNOWN,
    ComponentState,
    Health,
    InstalledCurrent,
    InstalledStale,
    NotInstalled,
    StatusRow,
    classify_version,
)
from stackctl.models.outcome import (
    ActionOutcome,
    OutcomeKind,
    RunContext,
    installed,
    skipped,
    updated,
)

__all__ = [
    "NOT_INSTALLED",
    "UNKNOWN",
    "ActionOutcome",
    "ComponentState",
    "Health",
    "InstalledCurrent",
    "InstalledStale",
    "NotInstalled",
    "OutcomeKind",
    "RunContext",
    "StatusRow",
    "classify_version",
    "installed",
    "skipped",
    "updated",
]
