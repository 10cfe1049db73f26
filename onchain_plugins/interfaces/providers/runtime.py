"""
Host agent runtime interface.

Plugins never talk to a model or the network directly; everything goes
through the capabilities the host runtime exposes here.
"""
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from onchain_plugins.domains.runtime import Memory, State

T = TypeVar("T", bound=BaseModel)

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def compose_context(state: State, template: str) -> str:
    """Fill ``{{placeholder}}`` slots in a template from the state values.

    Unknown placeholders render as an empty string.
    """
    values = state.template_values()

    def _replace(match: "re.Match[str]") -> str:
        value = values.get(match.group(1))
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(_replace, template)


class AgentRuntime(ABC):
    """Interface for the host agent runtime."""

    @property
    @abstractmethod
    def agent_name(self) -> str:
        """Display name of the agent."""
        pass

    @abstractmethod
    async def compose_state(self, message: Memory) -> State:
        """Build the conversation state for a message."""
        pass

    @abstractmethod
    async def update_recent_message_state(self, state: State) -> State:
        """Refresh the recent messages held in a state."""
        pass

    def compose_context(self, state: State, template: str) -> str:
        """Render a template against the state."""
        return compose_context(state, template)

    @abstractmethod
    async def generate_object(self, context: str, schema: Type[T]) -> T:
        """Extract a structured object matching the schema from the context."""
        pass

    @abstractmethod
    async def generate_text(self, context: str) -> str:
        """Generate free text from the context."""
        pass

    @abstractmethod
    async def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Any] = None,
        content: Optional[str] = None,
    ) -> httpx.Response:
        """Perform an outbound HTTP request."""
        pass
