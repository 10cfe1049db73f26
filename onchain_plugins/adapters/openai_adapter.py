"""
LLM provider adapter for OpenAI.

Implements the LLMProvider interface used by the standalone runtime.
"""

import logging
from typing import Any, Dict, Optional, Type, TypeVar

import logfire
from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel

from onchain_plugins.interfaces.providers.llm import LLMProvider

# Setup logger for this module
logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

DEFAULT_CHAT_MODEL = "gpt-5.2"
DEFAULT_PARSE_MODEL = "gpt-5.2"


def strict_json_schema(model_class: Type[BaseModel]) -> Dict[str, Any]:
    """JSON schema for a model in the form strict structured output accepts.

    Every object lists all of its properties as required and forbids extra
    ones. Optional fields already allow null; defaulted fields must be sent.
    """
    schema = model_class.model_json_schema()
    _make_strict(schema)
    return schema


def _make_strict(node: Any) -> None:
    if isinstance(node, list):
        for item in node:
            _make_strict(item)
        return
    if not isinstance(node, dict):
        return

    node.pop("default", None)
    if "properties" in node:
        node["required"] = list(node["properties"])
        node["additionalProperties"] = False
    for key in ("properties", "$defs"):
        for child in node.get(key, {}).values():
            _make_strict(child)
    for key in ("items", "anyOf", "allOf"):
        if key in node:
            _make_strict(node[key])


class OpenAIAdapter(LLMProvider):
    """OpenAI implementation of LLMProvider using the Responses API."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        logfire_api_key: Optional[str] = None,
    ):
        self.api_key = api_key
        self.client = AsyncOpenAI(api_key=api_key)

        self.logfire = False
        if logfire_api_key:
            try:
                logfire.configure(token=logfire_api_key)
                self.logfire = True
                logfire.instrument_openai(self.client)
                logger.info(
                    "Logfire configured and OpenAI client instrumented successfully."
                )
            except Exception as e:
                logger.error(f"Failed to configure Logfire: {e}")
                self.logfire = False

        self.text_model = model or DEFAULT_CHAT_MODEL
        self.parse_model = model or DEFAULT_PARSE_MODEL

    async def generate_text(
        self,
        prompt: str,
        system_prompt: str = "",
        model: Optional[str] = None,
    ) -> str:
        """Generate text using the OpenAI Responses API.

        Raises:
            RuntimeError: If the API call fails
        """
        request_params: Dict[str, Any] = {
            "model": model or self.text_model,
            "input": prompt,
            "reasoning": {"effort": "low"},
        }
        if system_prompt:
            request_params["instructions"] = system_prompt

        try:
            response = await self.client.responses.create(**request_params)
        except OpenAIError as e:
            logger.error(f"OpenAI API error during text generation: {e}")
            raise RuntimeError(f"OpenAI API error during text generation: {e}") from e

        if hasattr(response, "usage") and response.usage:
            logger.debug(
                f"OpenAI API Usage: Input={response.usage.input_tokens}, "
                f"Output={response.usage.output_tokens}"
            )
        return response.output_text or ""

    async def parse_structured_output(
        self,
        prompt: str,
        system_prompt: str,
        model_class: Type[T],
        model: Optional[str] = None,
    ) -> T:
        """Generate structured output using OpenAI Responses API with JSON schema.

        Falls back to chat completions in JSON mode when the schema request
        fails.

        Raises:
            ValueError: If neither method yields a valid object
        """
        current_parse_model = model or self.parse_model

        try:
            response = await self.client.responses.create(
                model=current_parse_model,
                instructions=system_prompt,
                input=prompt,
                text={
                    "format": {
                        "type": "json_schema",
                        "name": model_class.__name__,
                        "strict": True,
                        "schema": strict_json_schema(model_class),
                    }
                },
            )
            return model_class.model_validate_json(response.output_text)

        except Exception as e:
            logger.warning(f"Responses API structured output failed: {e}")

            try:
                logger.info("Falling back to chat completions with JSON schema.")
                fallback_system_prompt = f"""
{system_prompt}

You must respond with valid JSON that matches this schema:
{model_class.model_json_schema()}

Respond with ONLY the JSON object.
"""
                completion = await self.client.chat.completions.create(
                    model=current_parse_model,
                    messages=[
                        {"role": "system", "content": fallback_system_prompt},
                        {"role": "user", "content": prompt},
                    ],
                    response_format={"type": "json_object"},
                )

                json_str = completion.choices[0].message.content
                return model_class.model_validate_json(json_str)

            except Exception as fallback_error:
                logger.exception(
                    f"All structured output methods failed: {fallback_error}"
                )
                raise ValueError(f"Failed to generate structured output: {e}") from e
