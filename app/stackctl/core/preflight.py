"""Preflight checks run before anything is inspected or changed.

A mismatch never aborts on its own; the user is asked whether to
continue, and a negative answer ends the run cleanly.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from stackctl.core.config import StackConfig
from stackctl.operators.apt import AptOperator
from stackctl.operators.git import GitOperator
from stackctl.operators.system import SystemOperator
from stackctl.operators.venv import VenvOperator
from stackctl.probes.apt import AptProbe
from stackctl.probes.host import OS_RELEASE_PATH, detect_gpu, read_os_release
from stackctl.utils.formatting import print_check, print_info, print_success, print_warning

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


class UserDeclined(Exception):
    """Raised when the user answers no to a confirmation prompt."""


def check_os(config: StackConfig, confirm: Confirm, path: Path = OS_RELEASE_PATH) -> bool:
    """Verify the host runs the expected OS release.

    Args:
        config: Stack configuration with the expected OS id and version.
        confirm: Prompt returning True to continue after a mismatch.
        path: Location of the os-release file.

    Returns:
        True if the release matches (or cannot be read), False if the
        user chose to continue on a mismatch.

    Raises:
        UserDeclined: If the user declines to continue.
    """
    expected = f"{config.expected_os_id} {config.expected_os_version}"
    print_check(f"Checking {expected}...")
    release = read_os_release(path)
    if release is None:
        logger.debug("No os-release at %s, skipping OS check", path)
        return True

    if release.id == config.expected_os_id and release.version_id == config.expected_os_version:
        print_success(f"{release.pretty_name or expected} detected")
        return True

    print_warning(f"This installer is designed for {expected}.")
    print_warning(f"Detected: {release.pretty_name or release.id + ' ' + release.version_id}")
    if not confirm("Continue anyway?"):
        msg = f"OS mismatch: {release.id} {release.version_id}"
        raise UserDeclined(msg)
    return False


def check_gpu(config: StackConfig, confirm: Confirm) -> str | None:
    """Verify a display adapter from the configured vendor is present.

    Args:
        config: Stack configuration with the vendor pattern.
        confirm: Prompt returning True to continue without a GPU.

    Returns:
        Description of the detected adapters, or None if the user chose
        to continue without one.

    Raises:
        UserDeclined: If the user declines to continue.
    """
    print_check("Detecting GPU...")
    gpu = detect_gpu(config.gpu_vendor_pattern)
    if gpu:
        print_success(f"GPU detected: {gpu}")
        return gpu

    print_warning("No matching GPU detected. Installation may not work correctly.")
    if not confirm("Continue anyway?"):
        msg = "No matching GPU"
        raise UserDeclined(msg)
    return None


def check_tools(config: StackConfig, confirm: Confirm) -> list[str]:
    """Verify the system tools that convergence drives are installed.

    Package management and group tools must exist up front. git and the
    Python interpreter are only reported, since the prerequisites
    install them.

    Args:
        config: Stack configuration with the environment location.
        confirm: Prompt returning True to continue with tools missing.

    Returns:
        Names of missing required tools the user chose to ignore.

    Raises:
        UserDeclined: If the user declines to continue.
    """
    print_check("Checking system tools...")
    venv = VenvOperator(config.venv_path)
    for name, available in (
        ("git", GitOperator().is_available()),
        (venv.python, venv.is_available()),
    ):
        if not available:
            print_info(f"{name} not found yet; it is installed with the prerequisites.")

    required = (
        ("apt-get", AptOperator().is_available()),
        ("dpkg-query/apt-cache", AptProbe().is_available()),
        ("usermod", SystemOperator().is_available()),
    )
    missing = [name for name, available in required if not available]
    if not missing:
        print_success("System tools available")
        return []

    print_warning(f"Missing system tools: {', '.join(missing)}")
    if not confirm("Continue anyway?"):
        msg = f"Missing system tools: {', '.join(missing)}"
        raise UserDeclined(msg)
    return missing
