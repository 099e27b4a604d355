"""
Joint torques.
"""

from __future__ import annotations

from typing import ClassVar

from numpy.typing import ArrayLike

from kinestate.joint._projection import _JointProjection
from kinestate.joint.state import JointNames
from kinestate.types import JointStateVariable, StateType


class JointTorques(_JointProjection):
    STATE_TYPE: ClassVar[StateType] = StateType.JOINT_TORQUES
    DATA_VARIABLE: ClassVar[JointStateVariable] = JointStateVariable.TORQUES

    def __init__(
        self,
        robot_name: str = "",
        joint_names: JointNames = 0,
        *,
        torques: ArrayLike | None = None,
    ):
        super().__init__(robot_name, joint_names)
        if torques is not None:
            self.set_torques(torques)
