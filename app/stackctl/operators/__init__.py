"""Operators that change the host."""

from stackctl.operators.apt import AptOperator
from stackctl.operators.base import Operator, OperatorError
from stackctl.operators.git import GitOperator
from stackctl.operators.profile import ProfileOperator
from stackctl.operators.system import SystemOperator
from stackctl.operators.venv import VenvOperator

__all__ = [
    "AptOperator",
    "GitOperator",
    "Operator",
    "OperatorError",
    "ProfileOperator",
    "SystemOperator",
    "VenvOperator",
]
