"""
Name-keyed store of parameters.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Union

from kinestate.parameters.parameter import Parameter
from kinestate.types import ParameterType
from kinestate.utils.errors import InvalidParameterError

logger = logging.getLogger(__name__)

ParameterCollection = Union[Mapping[str, Parameter], Iterable[Parameter]]


class ParameterMap:
    """
    Collection of named parameters.

    Parameters are stored by name; setting a parameter with an existing name
    replaces it, setting a value keeps the stored type.
    """

    def __init__(self, parameters: ParameterCollection | None = None):
        self._parameters: dict[str, Parameter] = {}
        if parameters is not None:
            self.set_parameters(parameters)

    def get_parameter(self, name: str) -> Parameter:
        try:
            return self._parameters[name]
        except KeyError:
            raise InvalidParameterError(f"Could not find a parameter named '{name}'") from None

    def get_parameters(self) -> dict[str, Parameter]:
        return dict(self._parameters)

    def get_parameter_list(self) -> list[Parameter]:
        return list(self._parameters.values())

    def get_parameter_value(self, name: str) -> Any:
        return self.get_parameter(name).get_value()

    def set_parameter(self, parameter: Parameter) -> None:
        if not isinstance(parameter, Parameter):
            raise InvalidParameterError(
                f"Expected a Parameter, got {type(parameter).__name__}"
            )
        self._parameters[parameter.get_name()] = parameter
        logger.debug(
            "Set parameter '%s' (%s)", parameter.get_name(), parameter.get_parameter_type().name
        )

    def set_parameters(self, parameters: ParameterCollection) -> None:
        values = parameters.values() if isinstance(parameters, Mapping) else parameters
        for parameter in values:
            self.set_parameter(parameter)

    def set_parameter_value(
        self, name: str, value: Any, parameter_type: ParameterType | None = None
    ) -> None:
        """
        Write a value under ``name``, creating the parameter if needed.

        An existing parameter keeps its type; a different explicit
        ``parameter_type`` is rejected.
        """
        existing = self._parameters.get(name)
        if existing is None:
            self.set_parameter(Parameter(name, value, parameter_type))
            return
        if parameter_type is not None and parameter_type != existing.get_parameter_type():
            raise InvalidParameterError(
                f"Parameter '{name}' has type {existing.get_parameter_type().name}, "
                f"cannot set a value of type {parameter_type.name}"
            )
        existing.set_value(value)
        logger.debug("Updated value of parameter '%s'", name)

    def remove_parameter(self, name: str) -> None:
        if self._parameters.pop(name, None) is None:
            raise InvalidParameterError(f"Could not find a parameter named '{name}'")
        logger.debug("Removed parameter '%s'", name)

    def __contains__(self, name: object) -> bool:
        return name in self._parameters

    def __len__(self) -> int:
        return len(self._parameters)

    def __repr__(self) -> str:
        return f"ParameterMap({list(self._parameters)})"
