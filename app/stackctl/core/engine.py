"""Convergence engine.

Drives every component from its observed state to the current state in
a fixed order, recording exactly one outcome per component into the
run context.
"""

import logging
from collections.abc import Sequence

from stackctl.components.base import Component
from stackctl.models.component import (
    InstalledCurrent,
    InstalledStale,
    NotInstalled,
    StatusRow,
)
from stackctl.models.outcome import ActionOutcome, RunContext
from stackctl.utils.formatting import (
    print_check,
    print_header,
    print_skip,
    print_step,
    print_update,
)

logger = logging.getLogger(__name__)


def inspect_all(components: Sequence[Component]) -> list[StatusRow]:
    """Build the status snapshot in a single pass.

    Args:
        components: Components in convergence order.

    Returns:
        One status row per component, in the same order.
    """
    return [component.status() for component in components]


class ConvergenceEngine:
    """Sequential, fail-fast convergence over an ordered component list.

    There is no rollback: an exception from a component propagates
    immediately, leaving the run context with the outcomes of the
    components processed before it.

    Example:
        >>> ctx = RunContext()
        >>> engine = ConvergenceEngine(get_components(config))
        >>> engine.run(ctx)
        >>> len(ctx.installed)
        3
    """

    def __init__(self, components: Sequence[Component]) -> None:
        """Initialize the engine.

        Args:
            components: Components in convergence order.
        """
        self._components = list(components)

    @property
    def components(self) -> list[Component]:
        """Components in processing order."""
        return list(self._components)

    def run(self, ctx: RunContext) -> RunContext:
        """Converge every component in order.

        Args:
            ctx: Run context receiving outcomes and the restart flag.

        Returns:
            The same run context.

        Raises:
            OperatorError: If a component's install or update command fails.
        """
        for component in self._components:
            self.converge(component, ctx)
        return ctx

    def converge(self, component: Component, ctx: RunContext) -> ActionOutcome:
        """Re-inspect one component and apply the matching transition.

        The outcome is recorded only after the transition and the
        component's finalize hook succeed.

        Args:
            component: Component to converge.
            ctx: Run context receiving the outcome.

        Returns:
            The recorded outcome.

        Raises:
            OperatorError: If a command of the transition fails.
            TypeError: If inspect() returns an unknown state.
        """
        print_header(component.title)
        state = component.inspect()
        logger.debug("%s: %r", component.name, state)

        reboot = False
        if isinstance(state, NotInstalled):
            print_step(f"Installing {component.title}...")
            outcome = component.install(state)
            reboot = component.reboot_on_install
        elif isinstance(state, InstalledStale):
            print_check(f"{component.title} found (version: {state.current})")
            print_update(f"Updating {component.title} from {state.current} to {state.available}...")
            outcome = component.update(state)
            reboot = component.reboot_on_update
        elif isinstance(state, InstalledCurrent):
            print_check(f"{component.title} found (version: {state.version})")
            print_skip(f"{component.title} is up to date")
            outcome = component.skip(state)
        else:
            msg = f"Unknown state for {component.name}: {state!r}"
            raise TypeError(msg)

        component.finalize()

        ctx.record(outcome)
        if reboot:
            ctx.require_reboot()
        logger.info("%s: %s", component.name, outcome.kind.value)
        return outcome
