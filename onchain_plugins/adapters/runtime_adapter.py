"""
Standalone agent runtime.

Gives the plugins a host when they run outside an agent framework: messages
are kept in memory and model calls go through an LLMProvider.
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from onchain_plugins.domains.runtime import Memory, State, format_messages
from onchain_plugins.interfaces.providers.llm import LLMProvider
from onchain_plugins.interfaces.providers.runtime import AgentRuntime

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

DEFAULT_TIMEOUT = 30.0

EXTRACTION_PROMPT = (
    "You extract structured parameters from a conversation. Only use values the "
    "user actually gave; leave optional fields empty when they were not mentioned."
)


class LLMAgentRuntime(AgentRuntime):
    """AgentRuntime backed by an LLMProvider and an in-memory message log."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        agent_name: str = "Agent",
        bio: str = "",
        lore: str = "",
        knowledge: str = "",
        http_client: Optional[httpx.AsyncClient] = None,
        message_limit: int = 20,
    ):
        self.llm_provider = llm_provider
        self._agent_name = agent_name
        self.bio = bio
        self.lore = lore
        self.knowledge = knowledge
        self.http_client = http_client
        self.message_limit = message_limit
        self.providers = ""
        self._messages: List[Memory] = []

    @property
    def agent_name(self) -> str:
        return self._agent_name

    def add_message(self, message: Memory) -> None:
        """Append a message to the log unless it is already there."""
        if any(m.id == message.id for m in self._messages):
            return
        self._messages.append(message)

    def get_recent_messages(self, room_id: str = "default") -> List[Memory]:
        """Most recent messages of a room, oldest first."""
        room = [m for m in self._messages if m.room_id == room_id]
        return room[-self.message_limit :]

    async def compose_state(self, message: Memory) -> State:
        self.add_message(message)
        recent = self.get_recent_messages(message.room_id)
        return State(
            agent_name=self.agent_name,
            bio=self.bio,
            lore=self.lore,
            knowledge=self.knowledge,
            providers=self.providers,
            recent_messages_data=recent,
            recent_messages=format_messages(recent),
            values={"roomId": message.room_id},
        )

    async def update_recent_message_state(self, state: State) -> State:
        room_id = state.values.get("roomId", "default")
        recent = self.get_recent_messages(room_id)
        return state.model_copy(
            update={
                "recent_messages_data": recent,
                "recent_messages": format_messages(recent),
            }
        )

    async def generate_object(self, context: str, schema: Type[T]) -> T:
        logger.debug(f"Extracting {schema.__name__} from context")
        return await self.llm_provider.parse_structured_output(
            prompt=context,
            system_prompt=EXTRACTION_PROMPT,
            model_class=schema,
        )

    async def generate_text(self, context: str) -> str:
        return await self.llm_provider.generate_text(
            context, system_prompt=f"You are {self.agent_name}."
        )

    async def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Any] = None,
        content: Optional[str] = None,
    ) -> httpx.Response:
        if self.http_client is not None:
            return await self.http_client.request(
                method, url, headers=headers, json=json, content=content
            )
        async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT) as client:
            response = await client.request(
                method, url, headers=headers, json=json, content=content
            )
            await response.aread()
            return response
