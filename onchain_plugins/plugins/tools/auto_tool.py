"""
AutoTool implementation for the onchain plugins.

This module provides the base AutoTool class that implements the Tool interface
and can be extended to create toolset tools.
"""
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel

from onchain_plugins.interfaces.plugins.plugins import Tool


class AutoTool(Tool):
    """Base class for tools that validate their parameters with a pydantic model."""

    def __init__(
        self,
        name: str,
        description: str,
        parameters: Optional[Type[BaseModel]] = None,
    ):
        """Initialize the tool with name, description and parameter model."""
        self._name = name
        self._description = description
        self._parameters = parameters

    @property
    def name(self) -> str:
        """Get the name of the tool."""
        return self._name

    @property
    def description(self) -> str:
        """Get the description of the tool."""
        return self._description

    def parse_params(self, params: Dict[str, Any]) -> BaseModel:
        """Validate raw parameters against the parameter model.

        Raises:
            TypeError: If the tool declares no parameter model
            pydantic.ValidationError: If the parameters do not validate
        """
        if self._parameters is None:
            raise TypeError(f"Tool {self._name} declares no parameters")
        return self._parameters.model_validate(params)

    async def execute(self, **params) -> Any:
        """Execute the tool with the provided parameters."""
        # Override in subclasses
        raise NotImplementedError("Tool must implement execute method")
