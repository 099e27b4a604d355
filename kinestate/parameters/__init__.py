"""Runtime-typed parameters and the map that stores them."""

from kinestate.parameters.parameter import Parameter, infer_parameter_type
from kinestate.parameters.parameter_map import ParameterMap

__all__ = ["Parameter", "ParameterMap", "infer_parameter_type"]
