"""Local llama.cpp provider, for running the labeler without a hosted model."""

import logging
from typing import Any

from ai_issue_labeler.config import LLMConfig
from ai_issue_labeler.llm.provider import JsonSchema, LLMProvider

logger = logging.getLogger(__name__)


class LLaMAProvider(LLMProvider):
    """Runs a GGUF model in-process.

    Requires llama-cpp-python to be installed:
        pip install "ai-issue-labeler[llama]"
    """

    def __init__(self, config: LLMConfig) -> None:
        """
        Raises:
            ValueError: If no model path is configured.
            ImportError: If llama-cpp-python is not installed.
        """
        if not config.llama_model_path:
            raise ValueError("A llama model path is required (LABELER_LLM_LLAMA_MODEL_PATH)")

        try:
            from llama_cpp import Llama
        except ImportError as e:
            raise ImportError(
                "llama-cpp-python is required for LLaMA provider. "
                'Install it with: pip install "ai-issue-labeler[llama]"'
            ) from e

        self.config = config

        logger.info("Loading LLaMA model", extra={"path": str(config.llama_model_path)})

        self.llm = Llama(
            model_path=str(config.llama_model_path),
            n_ctx=config.llama_n_ctx,
            n_threads=config.llama_n_threads,
            verbose=False,
        )

        logger.info("LLaMA model loaded", extra={"n_ctx": config.llama_n_ctx})

    def generate(
        self,
        prompt: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
        response_schema: JsonSchema | None = None,
        **kwargs: Any,
    ) -> str:
        """Generate a completion using the local LLaMA model.

        The prompt is sent as a single user message so that a response schema can
        be enforced through the chat completion's JSON grammar.
        """
        if response_schema is not None:
            kwargs["response_format"] = {"type": "json_object", "schema": response_schema}

        logger.debug("Generating completion", extra={"prompt_chars": len(prompt)})

        result = self.llm.create_chat_completion(
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens or 512,
            temperature=temperature if temperature is not None else 0.2,
            **kwargs,
        )

        content = result["choices"][0]["message"]["content"] or ""
        logger.debug("Generated completion", extra={"chars": len(content)})

        return content
