"""Base state types."""

from kinestate.core.spatial_state import SpatialState
from kinestate.core.state import State

__all__ = ["State", "SpatialState"]
