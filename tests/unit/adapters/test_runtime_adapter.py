"""
Tests for the standalone LLM agent runtime.
"""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from onchain_plugins.adapters.runtime_adapter import LLMAgentRuntime
from onchain_plugins.domains.polymarket import EventQueryParams
from onchain_plugins.domains.runtime import Content, Memory
from onchain_plugins.interfaces.providers.llm import LLMProvider


@pytest.fixture
def llm():
    provider = MagicMock(spec=LLMProvider)
    provider.generate_text = AsyncMock(return_value="Here you go")
    provider.parse_structured_output = AsyncMock(
        return_value=EventQueryParams(query="election")
    )
    return provider


def _message(text, room_id="default"):
    return Memory(user_id="user1", room_id=room_id, content=Content(text=text))


class TestLLMAgentRuntime:
    """Test suite for LLMAgentRuntime."""

    @pytest.mark.asyncio
    async def test_compose_state(self, llm):
        runtime = LLMAgentRuntime(llm, agent_name="Ava", bio="A trader")
        state = await runtime.compose_state(_message("show events"))

        assert state.agent_name == "Ava"
        assert state.bio == "A trader"
        assert state.recent_messages == "user1: show events"
        assert len(state.recent_messages_data) == 1

    @pytest.mark.asyncio
    async def test_message_limit_and_rooms(self, llm):
        runtime = LLMAgentRuntime(llm, message_limit=2)
        for i in range(3):
            runtime.add_message(_message(f"m{i}"))
        runtime.add_message(_message("elsewhere", room_id="other"))

        state = await runtime.compose_state(_message("m3"))
        assert state.recent_messages == "user1: m2\nuser1: m3"

    @pytest.mark.asyncio
    async def test_update_recent_message_state(self, llm):
        runtime = LLMAgentRuntime(llm)
        state = await runtime.compose_state(_message("first"))
        runtime.add_message(_message("second"))

        updated = await runtime.update_recent_message_state(state)
        assert updated.recent_messages == "user1: first\nuser1: second"
        assert state.recent_messages == "user1: first"

    @pytest.mark.asyncio
    async def test_duplicate_message_not_added_twice(self, llm):
        runtime = LLMAgentRuntime(llm)
        message = _message("once")
        runtime.add_message(message)
        runtime.add_message(message)
        assert len(runtime.get_recent_messages()) == 1

    @pytest.mark.asyncio
    async def test_generate_object_delegates(self, llm):
        runtime = LLMAgentRuntime(llm)
        result = await runtime.generate_object("context", EventQueryParams)

        assert result.query == "election"
        kwargs = llm.parse_structured_output.call_args.kwargs
        assert kwargs["prompt"] == "context"
        assert kwargs["model_class"] is EventQueryParams

    @pytest.mark.asyncio
    async def test_generate_text_delegates(self, llm):
        runtime = LLMAgentRuntime(llm, agent_name="Ava")
        assert await runtime.generate_text("context") == "Here you go"
        assert llm.generate_text.call_args.kwargs["system_prompt"] == "You are Ava."

    @pytest.mark.asyncio
    async def test_fetch_uses_http_client(self, llm):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        runtime = LLMAgentRuntime(llm, http_client=http_client)

        response = await runtime.fetch(
            "https://api.example.com/pin",
            method="POST",
            headers={"Authorization": "Bearer t"},
            content='{"a": 1}',
        )
        assert response.json() == {"ok": True}
        assert seen[0].method == "POST"
        assert seen[0].headers["Authorization"] == "Bearer t"
        assert seen[0].content == b'{"a": 1}'
