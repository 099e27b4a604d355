"""
kinestate

Typed kinematic states for robotic systems: Cartesian and joint-space
positions, velocities, accelerations and forces, with frame-checked
arithmetic between them.

Key components:
- State / SpatialState: identity, empty flag, timestamp and frame compatibility
- CartesianState, CartesianPose, CartesianTwist, CartesianAcceleration,
  CartesianWrench: SE(3) algebra and time conversions through the
  quaternion log/exp map
- JointState, JointPositions, JointVelocities, JointAccelerations,
  JointTorques: the same operations over named joints
- Parameter / ParameterMap: named, runtime-typed values
- Shape / Ellipsoid: planar obstacles placed by a center pose
"""

from ._version import __version__
from .cartesian import (
    CartesianAcceleration,
    CartesianPose,
    CartesianState,
    CartesianTwist,
    CartesianWrench,
)
from .core.spatial_state import SpatialState
from .core.state import State
from .geometry import Ellipsoid, Shape
from .joint import (
    JointAccelerations,
    JointPositions,
    JointState,
    JointTorques,
    JointVelocities,
)
from .parameters import Parameter, ParameterMap
from .types import CartesianStateVariable, JointStateVariable, ParameterType, StateType

__all__ = [
    "__version__",
    "State",
    "SpatialState",
    "CartesianState",
    "CartesianPose",
    "CartesianTwist",
    "CartesianAcceleration",
    "CartesianWrench",
    "JointState",
    "JointPositions",
    "JointVelocities",
    "JointAccelerations",
    "JointTorques",
    "Parameter",
    "ParameterMap",
    "Shape",
    "Ellipsoid",
    "StateType",
    "CartesianStateVariable",
    "JointStateVariable",
    "ParameterType",
]
