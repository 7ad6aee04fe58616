"""Compute runtime components: user groups, ROCm and its shell environment."""

import logging

from stackctl.artifacts.templates import render_profile_block
from stackctl.components.base import Component
from stackctl.core.config import StackConfig
from stackctl.models.component import (
    ComponentState,
    Health,
    InstalledCurrent,
    InstalledStale,
    NotInstalled,
    StatusRow,
)
from stackctl.models.outcome import ActionOutcome, installed, skipped, updated
from stackctl.operators.apt import AptOperator
from stackctl.operators.profile import ProfileOperator
from stackctl.operators.system import SystemOperator
from stackctl.probes.apt import AptProbe
from stackctl.probes.host import current_user, user_groups
from stackctl.probes.profile import ShellProfile
from stackctl.probes.rocm import RocmProbe
from stackctl.utils.formatting import print_skip, print_step

logger = logging.getLogger(__name__)


class UserGroups(Component):
    """Membership of the invoking user in the GPU device groups."""

    name = "user-groups"
    title = "User groups"
    reboot_on_install = True

    def __init__(self, config: StackConfig, dry_run: bool = False) -> None:
        super().__init__(config, dry_run)
        self.user = current_user()
        self.system = SystemOperator(dry_run=dry_run)

    @property
    def label(self) -> str:
        """Title with the managed groups, e.g. "User groups: render, video"."""
        return f"{self.title}: {', '.join(self.config.groups)}"

    def missing_groups(self) -> list[str]:
        """Configured groups the user is not a member of."""
        member_of = user_groups(self.user)
        return [group for group in self.config.groups if group not in member_of]

    def inspect(self) -> ComponentState:
        missing = self.missing_groups()
        if missing:
            return NotInstalled(missing=tuple(missing))
        return InstalledCurrent()

    def status(self) -> StatusRow:
        title = f"{self.title} ({'/'.join(self.config.groups)})"
        if self.missing_groups():
            return StatusRow(title, Health.NEEDS_CONFIG)
        return StatusRow(title, Health.OK)

    def install(self, state: NotInstalled) -> ActionOutcome:
        for group in self.config.groups:
            if group in state.missing:
                print_step(f"Adding {self.user} to '{group}' group...")
                self.system.add_user_to_group(self.user, group)
            else:
                print_skip(f"{self.user} already in '{group}' group")
        return installed(self.label)

    def skip(self, state: InstalledCurrent) -> ActionOutcome:
        return skipped(f"{self.label} (already configured)")


class ComputeRuntime(Component):
    """The ROCm runtime metapackage.

    Stale when ``apt list --upgradable`` lists a matching package. The
    version after an update is re-read from the installed tree.
    """

    name = "compute-runtime"
    title = "ROCm"
    reboot_on_install = True
    reboot_on_update = True

    def __init__(self, config: StackConfig, dry_run: bool = False) -> None:
        super().__init__(config, dry_run)
        self.rocm = RocmProbe()
        self.probe = AptProbe()
        self.apt = AptOperator(dry_run=dry_run)

    def inspect(self) -> ComponentState:
        if not self.rocm.is_installed():
            return NotInstalled(missing=(self.config.runtime_package,))
        current = self.rocm.version()
        self.apt.update_index()
        # The upgradable candidate is a package version, the installed
        # value is the tree's release string; only presence is compared.
        candidate = self.probe.upgradable(self.config.runtime_package)
        if not candidate:
            return InstalledCurrent(version=current)
        return InstalledStale(current=current, available=candidate)

    def status(self) -> StatusRow:
        if not self.rocm.is_installed():
            return StatusRow(self.title, Health.MISSING)
        return StatusRow(self.title, Health.OK, f"v{self.rocm.version()}")

    def install(self, state: NotInstalled) -> ActionOutcome:
        self.apt.install([self.config.runtime_package])
        return installed(f"{self.title} {self.config.rocm_version}")

    def update(self, state: InstalledStale) -> ActionOutcome:
        self.apt.upgrade([self.config.runtime_package])
        after = state.available if self.dry_run else self.rocm.version()
        return updated(self.title, before=state.current, after=after)


class ShellEnvironment(Component):
    """Environment exports persisted in the user's shell profile.

    A sentinel comment marks the block. When the block exists but some
    exports are missing, only those are appended. The exports are also
    applied to this process so later steps see the runtime.
    """

    name = "shell-environment"
    title = "ROCm environment"

    def __init__(self, config: StackConfig, dry_run: bool = False) -> None:
        super().__init__(config, dry_run)
        self.profile = ShellProfile(config.profile_path)
        self.operator = ProfileOperator(config.profile_path, dry_run=dry_run)

    @property
    def label(self) -> str:
        """Outcome description."""
        return f"{self.title} configuration"

    def inspect(self) -> ComponentState:
        if not self.profile.has_sentinel(self.config.env_sentinel):
            return NotInstalled()
        total = len(self.config.env)
        missing = self.profile.missing_exports(self.config.env)
        if not missing:
            return InstalledCurrent(version=f"{total}/{total} exports")
        return InstalledStale(
            current=f"{total - len(missing)}/{total} exports",
            available=f"{total}/{total} exports",
        )

    def status(self) -> StatusRow:
        if not self.profile.has_sentinel(self.config.env_sentinel):
            return StatusRow(self.title, Health.NEEDS_CONFIG)
        missing = self.profile.missing_exports(self.config.env)
        if missing:
            changed = [key for key in missing if self.profile.has_export(key)]
            absent = [key for key in missing if key not in changed]
            details = []
            if absent:
                details.append(f"missing {', '.join(absent)}")
            if changed:
                details.append(f"changed {', '.join(changed)}")
            return StatusRow(self.title, Health.NEEDS_CONFIG, "; ".join(details))
        return StatusRow(self.title, Health.OK)

    def install(self, state: NotInstalled) -> ActionOutcome:
        print_step(f"Configuring {self.title} in {self.config.profile_path}...")
        missing = self.profile.missing_exports(self.config.env)
        self.operator.ensure_block(
            self.config.env_sentinel,
            render_profile_block(self.config, env=missing),
        )
        return installed(self.label)

    def update(self, state: InstalledStale) -> ActionOutcome:
        added = self.operator.ensure_exports(self.config.env)
        logger.info("Added exports: %s", ", ".join(added))
        return updated(self.label, before=state.current, after=state.available)

    def skip(self, state: InstalledCurrent) -> ActionOutcome:
        return skipped(f"{self.title} (already configured)")

    def finalize(self) -> None:
        self.operator.apply_to_process(self.config.env)
