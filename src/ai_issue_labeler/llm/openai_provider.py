"""OpenAI LLM provider implementation."""

import json
import logging
from typing import Any

from openai import OpenAI

from ai_issue_labeler.config import LLMConfig
from ai_issue_labeler.labeling.parser import strip_code_fences
from ai_issue_labeler.llm.provider import JsonSchema, LLMProvider

logger = logging.getLogger(__name__)

# Structured outputs require an object at the top level, so array schemas are
# sent wrapped in this property and unwrapped from the reply.
_ENVELOPE_KEY = "items"


def _response_format(schema: dict[str, Any]) -> tuple[dict[str, Any], bool]:
    """Return (response_format, wrapped) for a JSON schema."""

    wrapped = schema.get("type") != "object"
    if wrapped:
        schema = {
            "type": "object",
            "properties": {_ENVELOPE_KEY: schema},
            "required": [_ENVELOPE_KEY],
            "additionalProperties": False,
        }
    response_format = {
        "type": "json_schema",
        "json_schema": {"name": "response", "schema": schema, "strict": False},
    }
    return response_format, wrapped


def _unwrap(content: str) -> str:
    try:
        data = json.loads(strip_code_fences(content))
    except json.JSONDecodeError:
        return content
    if isinstance(data, dict) and _ENVELOPE_KEY in data:
        return json.dumps(data[_ENVELOPE_KEY], ensure_ascii=False)
    return content


class OpenAIProvider(LLMProvider):
    """OpenAI API provider implementation."""

    def __init__(self, config: LLMConfig, client: OpenAI | None = None) -> None:
        """Initialize the OpenAI provider.

        Args:
            config: LLM configuration.
            client: Optional pre-built client (used by tests).

        Raises:
            ValueError: If API key is not provided.
        """
        if client is None and not config.openai_api_key:
            raise ValueError("OpenAI API key is required")

        self.config = config
        self.client = client or OpenAI(api_key=config.openai_api_key)
        self.model = config.openai_model
        self.temperature = config.openai_temperature

        logger.info("OpenAI provider initialized", extra={"model": self.model})

    def generate(
        self,
        prompt: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
        response_schema: JsonSchema | None = None,
        **kwargs: Any,
    ) -> str:
        """Generate text completion using OpenAI API.

        Args:
            prompt: The input prompt.
            max_tokens: Maximum tokens to generate.
            temperature: Sampling temperature.
            response_schema: Optional JSON schema for structured output. Array
                schemas are wrapped in an object envelope and the reply is
                unwrapped back to the bare array.
            **kwargs: Additional OpenAI-specific parameters.

        Returns:
            Generated text completion.
        """
        temp = temperature if temperature is not None else self.temperature

        wrapped = False
        if response_schema is not None:
            kwargs["response_format"], wrapped = _response_format(response_schema)

        logger.debug("Generating completion", extra={"prompt_chars": len(prompt)})

        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
            temperature=temp,
            **kwargs,
        )

        content = response.choices[0].message.content or ""
        logger.debug("Generated completion", extra={"chars": len(content)})

        if wrapped:
            return _unwrap(content)
        return content
