"""
Type definitions for kinestate.

Defines the enums used to tag states, select state variables and
declare parameter payloads across the public API.
"""

from datetime import timedelta
from enum import Enum, auto

# Durations are plain timedeltas; a float operand is always a scalar
Duration = timedelta


class StateType(Enum):
    """Closed set of concrete state kinds."""

    STATE = auto()
    SPATIAL_STATE = auto()
    CARTESIAN_STATE = auto()
    CARTESIAN_POSE = auto()
    CARTESIAN_TWIST = auto()
    CARTESIAN_ACCELERATION = auto()
    CARTESIAN_WRENCH = auto()
    JOINT_STATE = auto()
    JOINT_POSITIONS = auto()
    JOINT_VELOCITIES = auto()
    JOINT_ACCELERATIONS = auto()
    JOINT_TORQUES = auto()
    GEOMETRY_SHAPE = auto()
    ELLIPSOID = auto()
    PARAMETER = auto()


class CartesianStateVariable(Enum):
    """Selector for the fields of a Cartesian state."""

    POSITION = auto()
    ORIENTATION = auto()
    LINEAR_VELOCITY = auto()
    ANGULAR_VELOCITY = auto()
    LINEAR_ACCELERATION = auto()
    ANGULAR_ACCELERATION = auto()
    FORCE = auto()
    TORQUE = auto()
    POSE = auto()  # position + orientation
    TWIST = auto()  # linear + angular velocity
    ACCELERATION = auto()  # linear + angular acceleration
    WRENCH = auto()  # force + torque
    ALL = auto()


class JointStateVariable(Enum):
    """Selector for the fields of a joint state."""

    POSITIONS = auto()
    VELOCITIES = auto()
    ACCELERATIONS = auto()
    TORQUES = auto()
    ALL = auto()


class ParameterType(Enum):
    """Payload kinds a Parameter can carry."""

    INT = auto()
    INT_ARRAY = auto()
    DOUBLE = auto()
    DOUBLE_ARRAY = auto()
    BOOL = auto()
    BOOL_ARRAY = auto()
    STRING = auto()
    STRING_ARRAY = auto()
    CARTESIAN_STATE = auto()
    CARTESIAN_POSE = auto()
    JOINT_STATE = auto()
    JOINT_POSITIONS = auto()
    MATRIX = auto()
    VECTOR = auto()


def duration_to_seconds(dt: Duration) -> float:
    """Convert a duration to float seconds."""
    return dt.total_seconds()
