"""
Joint-space states.

- JointState: positions, velocities, accelerations and torques per joint
- JointPositions / JointVelocities / JointAccelerations / JointTorques:
  single-field projections, converted into one another by multiplying or
  dividing by a timedelta
"""

from kinestate.joint.accelerations import JointAccelerations
from kinestate.joint.positions import JointPositions
from kinestate.joint.state import JointState, dist
from kinestate.joint.torques import JointTorques
from kinestate.joint.velocities import JointVelocities

__all__ = [
    "JointState",
    "JointPositions",
    "JointVelocities",
    "JointAccelerations",
    "JointTorques",
    "dist",
]
