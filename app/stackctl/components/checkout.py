"""Git checkout components: the application and its plugin."""

import logging
from pathlib import Path

from stackctl.components.base import Component
from stackctl.core.config import StackConfig
from stackctl.models.component import (
    UNKNOWN,
    ComponentState,
    Health,
    InstalledStale,
    NotInstalled,
    StatusRow,
    classify_version,
)
from stackctl.models.outcome import ActionOutcome, installed, updated
from stackctl.operators.base import OperatorError
from stackctl.operators.git import GitOperator
from stackctl.operators.venv import VenvOperator
from stackctl.probes.git import GitProbe
from stackctl.utils.formatting import print_step, print_warning

logger = logging.getLogger(__name__)


class GitCheckout(Component):
    """A checkout kept at the head of its remote branch.

    The local HEAD is compared to the remote head after a fetch; a
    mismatch is pulled, trying each configured branch in order.

    Attributes:
        title: Display name of the checkout.
        url: Repository URL.
        path: Checkout directory.
        branches: Branch names tried in order.
        marker: File that must exist for the checkout to count as present.
    """

    marker: str | None = None

    def __init__(
        self,
        config: StackConfig,
        dry_run: bool = False,
        *,
        title: str,
        url: str,
        path: Path,
        branches: list[str],
    ) -> None:
        super().__init__(config, dry_run)
        self.title = title
        self.url = url
        self.path = path
        self.branches = branches
        self.probe = GitProbe()
        self.git = GitOperator(dry_run=dry_run)

    def is_present(self) -> bool:
        """Check if the checkout exists on disk."""
        return self.probe.is_checkout(self.path, self.marker)

    def inspect(self) -> ComponentState:
        if not self.is_present():
            return NotInstalled()
        self.probe.fetch(self.path)
        local = self.probe.local_head(self.path) or UNKNOWN
        remote = self.probe.remote_head(self.path, self.branches)
        return classify_version(local, remote)

    def status(self) -> StatusRow:
        if not self.is_present():
            return StatusRow(self.title, Health.MISSING)
        head = self.probe.local_head(self.path)
        return StatusRow(self.title, Health.OK, head[:12] if head else None)

    def install(self, state: NotInstalled) -> ActionOutcome:
        self.git.clone(self.url, self.path)
        return installed(self.title)

    def update(self, state: InstalledStale) -> ActionOutcome:
        branch = self.git.pull(self.path, self.branches)
        logger.info("Pulled %s from %s", self.title, branch)
        return updated(self.title, before=state.current, after=state.available)


class AppCheckout(GitCheckout):
    """The application checkout."""

    name = "app-checkout"
    marker = "main.py"

    def __init__(self, config: StackConfig, dry_run: bool = False) -> None:
        super().__init__(
            config,
            dry_run,
            title=config.app_name,
            url=config.app_repo,
            path=config.app_dir,
            branches=config.app_branches,
        )


class PluginCheckout(GitCheckout):
    """The plugin manager checkout inside the application's custom nodes.

    Its requirements are installed into the application environment
    after every run; a failure there is only a warning.
    """

    name = "plugin-checkout"

    def __init__(self, config: StackConfig, dry_run: bool = False) -> None:
        super().__init__(
            config,
            dry_run,
            title=config.plugin_dir_name,
            url=config.plugin_repo,
            path=config.plugin_dir,
            branches=config.plugin_branches,
        )
        self.venv = VenvOperator(config.venv_path, dry_run=dry_run)

    def finalize(self) -> None:
        requirements = self.path / "requirements.txt"
        if not requirements.is_file():
            logger.debug("No requirements file in %s", self.path)
            return
        print_step(f"Installing {self.title} requirements...")
        try:
            self.venv.pip_install(["-r", str(requirements), "--quiet"])
        except OperatorError as e:
            print_warning(f"Could not install {self.title} requirements: {e}")
