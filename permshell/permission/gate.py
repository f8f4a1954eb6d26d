"""
Authorization Gate - Per-operation access decisions with a one-shot override.

The gate has two states:
- NORMAL: decisions follow the target's simulated mode
- ESCALATED: every decision is allowed

`escalate()` moves the gate to ESCALATED. Every processed command runs
inside `command_scope()`, and when that scope closes the gate drops back to
NORMAL unless the command itself escalated. The override therefore covers
exactly the next command, whatever it is and however it ends.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Generator

from ..logger import get_logger
from .codec import classify

_logger = get_logger()


class GateState(Enum):
    """Override state of the gate."""
    NORMAL = "normal"
    ESCALATED = "escalated"


class Operation(Enum):
    """Kinds of operation the gate decides on."""
    DELETE = "delete"
    MOVE_SOURCE = "move_source"
    COPY_SOURCE = "copy_source"
    CREATE = "create"
    CHANGE_MODE = "change_mode"
    REMOVE_DIRECTORY = "remove_directory"
    OVERWRITE_DESTINATION = "overwrite_destination"
    LIST = "list"
    SHOW = "show"


# Operations that need the owner write bit
_NEEDS_WRITE = {Operation.DELETE, Operation.MOVE_SOURCE}

# Operations that need the owner read bit
_NEEDS_READ = {Operation.COPY_SOURCE}


class AuthorizationGate:
    """Decides whether an operation on a target may proceed.

    Example:
        gate = AuthorizationGate()
        gate.authorize(Operation.DELETE, "-r--------")   # False

        with gate.command_scope():
            gate.escalate()                              # the sudo command
        with gate.command_scope():
            gate.authorize(Operation.DELETE, "-r--------")  # True
        gate.authorize(Operation.DELETE, "-r--------")   # False again
    """

    def __init__(self, guard_destinations: bool = False):
        """Initialize the gate.

        Args:
            guard_destinations: Require the owner write bit on existing
                copy/move destinations before overwriting them
        """
        self.guard_destinations = guard_destinations
        self._state = GateState.NORMAL
        self._escalated_in_scope = False

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def is_escalated(self) -> bool:
        return self._state is GateState.ESCALATED

    def escalate(self) -> None:
        """Allow everything for the next command."""
        self._state = GateState.ESCALATED
        self._escalated_in_scope = True
        _logger.info("gate", "escalated")

    @contextmanager
    def command_scope(self) -> Generator["AuthorizationGate", None, None]:
        """Wrap the processing of one command.

        On exit, a pending escalation is consumed unless this very command
        set it.
        """
        self._escalated_in_scope = False
        try:
            yield self
        finally:
            if not self._escalated_in_scope and self._state is GateState.ESCALATED:
                self._state = GateState.NORMAL
                _logger.debug("gate", "escalation_consumed")
            self._escalated_in_scope = False

    def authorize(self, operation: Operation, mode: str) -> bool:
        """Decide whether operation may proceed on a target with this mode.

        Args:
            operation: What is being attempted
            mode: Current symbolic mode of the target

        Returns:
            True if allowed. Denial is an ordinary False, never an error.
        """
        if self._state is GateState.ESCALATED:
            allowed = True
        else:
            flags = classify(mode)
            if operation in _NEEDS_WRITE:
                allowed = flags.is_writable
            elif operation in _NEEDS_READ:
                allowed = flags.is_readable
            elif operation is Operation.OVERWRITE_DESTINATION:
                allowed = flags.is_writable or not self.guard_destinations
            else:
                allowed = True

        _logger.debug("gate", "decision", {
            "operation": operation.value,
            "mode": mode,
            "state": self._state.value,
            "allowed": allowed,
        })
        return allowed
