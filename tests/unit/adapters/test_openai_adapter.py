"""
Tests for the OpenAI adapter.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from openai import OpenAIError

from onchain_plugins.adapters.openai_adapter import (
    DEFAULT_CHAT_MODEL,
    OpenAIAdapter,
    strict_json_schema,
)
from onchain_plugins.domains.polymarket import EventQueryParams
from onchain_plugins.domains.zora import CreateCoinParams, TradeCoinParams


@pytest.fixture
def adapter():
    adapter = OpenAIAdapter(api_key="test-key")
    adapter.client = MagicMock()
    adapter.client.responses.create = AsyncMock()
    adapter.client.chat.completions.create = AsyncMock()
    return adapter


class TestOpenAIAdapter:
    """Test suite for OpenAIAdapter."""

    def test_default_models(self):
        adapter = OpenAIAdapter(api_key="test-key")
        assert adapter.text_model == DEFAULT_CHAT_MODEL
        assert adapter.logfire is False

    def test_model_override(self):
        adapter = OpenAIAdapter(api_key="test-key", model="gpt-test")
        assert adapter.text_model == "gpt-test"
        assert adapter.parse_model == "gpt-test"

    @pytest.mark.asyncio
    async def test_generate_text(self, adapter):
        adapter.client.responses.create.return_value = MagicMock(
            output_text="hello", usage=None
        )
        assert await adapter.generate_text("prompt", system_prompt="sys") == "hello"
        kwargs = adapter.client.responses.create.call_args.kwargs
        assert kwargs["instructions"] == "sys"
        assert kwargs["input"] == "prompt"

    @pytest.mark.asyncio
    async def test_generate_text_api_error(self, adapter):
        adapter.client.responses.create.side_effect = OpenAIError("boom")
        with pytest.raises(RuntimeError, match="boom"):
            await adapter.generate_text("prompt")

    @pytest.mark.asyncio
    async def test_parse_structured_output(self, adapter):
        adapter.client.responses.create.return_value = MagicMock(
            output_text='{"query": "nba", "limit": 3, "active": false}'
        )
        result = await adapter.parse_structured_output("p", "s", EventQueryParams)
        assert result == EventQueryParams(query="nba", limit=3, active=False)
        adapter.client.chat.completions.create.assert_not_called()

        text_format = adapter.client.responses.create.call_args.kwargs["text"]["format"]
        assert text_format["strict"] is True
        assert text_format["schema"] == strict_json_schema(EventQueryParams)
        assert text_format["schema"]["additionalProperties"] is False

    @pytest.mark.asyncio
    async def test_parse_structured_output_fallback(self, adapter):
        adapter.client.responses.create.side_effect = Exception("schema rejected")
        choice = MagicMock()
        choice.message.content = '{"limit": 5}'
        adapter.client.chat.completions.create.return_value = MagicMock(choices=[choice])

        result = await adapter.parse_structured_output("p", "s", EventQueryParams)
        assert result.limit == 5
        assert result.active is True

    @pytest.mark.asyncio
    async def test_parse_structured_output_all_fail(self, adapter):
        adapter.client.responses.create.side_effect = Exception("schema rejected")
        adapter.client.chat.completions.create.side_effect = Exception("down")
        with pytest.raises(ValueError, match="Failed to generate structured output"):
            await adapter.parse_structured_output("p", "s", EventQueryParams)


class TestStrictJsonSchema:
    """Schemas sent with strict structured output."""

    @pytest.mark.parametrize(
        "model_class", [CreateCoinParams, TradeCoinParams, EventQueryParams]
    )
    def test_every_property_required(self, model_class):
        schema = strict_json_schema(model_class)
        assert sorted(schema["required"]) == sorted(schema["properties"])
        assert schema["additionalProperties"] is False

    def test_defaults_removed_and_optional_fields_nullable(self):
        schema = strict_json_schema(CreateCoinParams)
        for prop in schema["properties"].values():
            assert "default" not in prop
        uri_types = [option.get("type") for option in schema["properties"]["uri"]["anyOf"]]
        assert "null" in uri_types

    def test_model_schema_not_mutated(self):
        strict_json_schema(EventQueryParams)
        assert "required" not in EventQueryParams.model_json_schema()
