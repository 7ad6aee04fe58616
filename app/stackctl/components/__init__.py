"""Managed components, one class per unit of installable state."""

from stackctl.components.base import Component
from stackctl.components.checkout import AppCheckout, GitCheckout, PluginCheckout
from stackctl.components.driver import DriverInstaller, KernelDriver
from stackctl.components.packages import Prerequisites
from stackctl.components.python_env import Framework, VirtualEnv
from stackctl.components.runtime import ComputeRuntime, ShellEnvironment, UserGroups

__all__ = [
    "AppCheckout",
    "Component",
    "ComputeRuntime",
    "DriverInstaller",
    "Framework",
    "GitCheckout",
    "KernelDriver",
    "PluginCheckout",
    "Prerequisites",
    "ShellEnvironment",
    "UserGroups",
    "VirtualEnv",
]
