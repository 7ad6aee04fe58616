"""The ordered component catalogue.

Order follows real dependencies: packages before drivers, drivers before
the runtime, the application checkout before its environment, the
environment before the plugin whose requirements install into it.
"""

from stackctl.components import (
    AppCheckout,
    Component,
    ComputeRuntime,
    DriverInstaller,
    Framework,
    KernelDriver,
    PluginCheckout,
    Prerequisites,
    ShellEnvironment,
    UserGroups,
    VirtualEnv,
)
from stackctl.core.config import StackConfig

COMPONENT_ORDER: tuple[type[Component], ...] = (
    Prerequisites,
    DriverInstaller,
    KernelDriver,
    UserGroups,
    ComputeRuntime,
    ShellEnvironment,
    AppCheckout,
    VirtualEnv,
    Framework,
    PluginCheckout,
)


def get_components(config: StackConfig, dry_run: bool = False) -> list[Component]:
    """Instantiate every component in convergence order.

    Args:
        config: Stack configuration.
        dry_run: If True, components only log their commands.

    Returns:
        Components in the fixed dependency order.
    """
    return [component_cls(config, dry_run) for component_cls in COMPONENT_ORDER]
