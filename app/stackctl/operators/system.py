"""System administration operator implementation."""

from stackctl.operators.base import Operator
from stackctl.utils.shell import command_exists


class SystemOperator(Operator):
    """Group membership and reboot."""

    def is_available(self) -> bool:
        """Check if usermod is available."""
        return command_exists("usermod")

    def add_user_to_group(self, user: str, group: str) -> None:
        """Append a supplementary group to a user.

        Raises:
            OperatorError: If usermod fails.
        """
        self._execute(["sudo", "usermod", "-a", "-G", group, user])

    def reboot(self) -> None:
        """Reboot the machine.

        Raises:
            OperatorError: If the reboot command fails.
        """
        self._execute(["sudo", "reboot"])
