"""Read-only host probes.

Probes never install or modify anything. When state cannot be
determined they report absence instead of raising.
"""

from stackctl.probes.apt import AptProbe
from stackctl.probes.git import GitProbe
from stackctl.probes.profile import ShellProfile
from stackctl.probes.rocm import RocmProbe
from stackctl.probes.venv import VenvProbe

__all__ = ["AptProbe", "GitProbe", "RocmProbe", "ShellProfile", "VenvProbe"]
