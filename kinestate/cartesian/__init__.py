"""
Cartesian (task-space) states.

- CartesianState: every kinematic quantity of a frame, with SE(3) algebra
- CartesianPose / CartesianTwist / CartesianAcceleration / CartesianWrench:
  projections exposing only their own fields, converted into one another
  by multiplying or dividing by a timedelta
"""

from kinestate.cartesian.acceleration import CartesianAcceleration
from kinestate.cartesian.pose import CartesianPose
from kinestate.cartesian.state import CartesianState, dist, variable_size
from kinestate.cartesian.twist import CartesianTwist
from kinestate.cartesian.wrench import CartesianWrench

__all__ = [
    "CartesianState",
    "CartesianPose",
    "CartesianTwist",
    "CartesianAcceleration",
    "CartesianWrench",
    "dist",
    "variable_size",
]
