"""
Shared fixtures for the onchain plugin tests.
"""

from typing import Any, Dict, List, Optional, Type

import pytest
from unittest.mock import AsyncMock

from onchain_plugins.domains.runtime import Content, Memory, State
from onchain_plugins.interfaces.providers.runtime import AgentRuntime

# Well-known development key (first Hardhat/Anvil account)
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


class FakeRuntime(AgentRuntime):
    """Runtime double that returns queued objects and fixed text."""

    __test__ = False

    def __init__(self, objects: Optional[List[Any]] = None, text: str = "Done."):
        self.objects = list(objects or [])
        self.text = text
        self.object_calls: List[Dict[str, Any]] = []
        self.text_calls: List[str] = []
        self.fetch = AsyncMock()
        self.compose_state_calls = 0
        self.update_calls = 0

    @property
    def agent_name(self) -> str:
        return "Tester"

    async def compose_state(self, message: Memory) -> State:
        self.compose_state_calls += 1
        return State(agent_name=self.agent_name, recent_messages=message.content.text)

    async def update_recent_message_state(self, state: State) -> State:
        self.update_calls += 1
        return state

    async def generate_object(self, context: str, schema: Type[Any]) -> Any:
        self.object_calls.append({"context": context, "schema": schema})
        value = self.objects.pop(0)
        if isinstance(value, dict):
            return schema.model_validate(value)
        return value

    async def generate_text(self, context: str) -> str:
        self.text_calls.append(context)
        return self.text

    async def fetch(self, url, method="GET", headers=None, json=None, content=None):
        # Replaced per instance by an AsyncMock
        raise NotImplementedError


@pytest.fixture
def test_private_key():
    return TEST_PRIVATE_KEY


@pytest.fixture
def test_address():
    return TEST_ADDRESS


@pytest.fixture
def make_runtime():
    """Factory for FakeRuntime instances."""

    def _make(objects=None, text="Done.") -> FakeRuntime:
        return FakeRuntime(objects=objects, text=text)

    return _make


@pytest.fixture
def message():
    return Memory(user_id="user1", content=Content(text="hello"))


@pytest.fixture
def polymarket_config(test_private_key):
    return {
        "POLYMARKET_API_KEY": "key",
        "POLYMARKET_SECRET": "secret",
        "POLYMARKET_PASSPHRASE": "pass",
        "WALLET_PRIVATE_KEY": test_private_key,
        "RPC_PROVIDER_URL": "https://polygon-rpc.example.com",
    }


@pytest.fixture
def zora_config(test_private_key):
    return {
        "ZORA_RPC_URL": "https://base-mainnet.example.com/v2/abc",
        "ZORA_PRIVATE_KEY": test_private_key,
    }
