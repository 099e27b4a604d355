"""Exceptions raised by state operations.

All errors are raised synchronously at the point the invalid operation is
attempted; none of the operations return sentinel values instead.
"""


class StateRepresentationError(Exception):
    """Base class for all kinestate errors."""


class EmptyStateError(StateRepresentationError):
    """The operation needs numeric content that was never written."""


class IncompatibleStatesError(StateRepresentationError):
    """Operands disagree on reference frames or joint names."""


class IncompatibleSizeError(StateRepresentationError, ValueError):
    """A vector or matrix operand has the wrong dimension."""


class JointNotFoundError(StateRepresentationError, KeyError):
    """Lookup of a joint by name or index failed."""

    def __init__(self, message: str, joint_name: str | int | None = None):
        super().__init__(message)
        self.message = message
        self.joint_name = joint_name

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


class InvalidCastError(StateRepresentationError, TypeError):
    """A spatial capability check was applied to a non-spatial state."""


class InvalidParameterError(StateRepresentationError):
    """A parameter is missing or its value disagrees with its declared type."""


class NotImplementedStateError(StateRepresentationError, NotImplementedError):
    """The operation is not defined for this state or selector."""
