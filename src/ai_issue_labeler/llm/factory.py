"""Selects the model backend from configuration."""

import logging

from ai_issue_labeler.config import LLMConfig
from ai_issue_labeler.llm.llama_provider import LLaMAProvider
from ai_issue_labeler.llm.openai_provider import OpenAIProvider
from ai_issue_labeler.llm.provider import LLMProvider

logger = logging.getLogger(__name__)


class LLMFactory:
    """Builds the :class:`LLMProvider` named by ``LABELER_LLM_PROVIDER``."""

    @staticmethod
    def create(config: LLMConfig) -> LLMProvider:
        """
        Raises:
            ValueError: If the provider is unknown or misconfigured.
        """
        logger.info("Creating LLM provider", extra={"provider": config.provider})

        if config.provider == "openai":
            return OpenAIProvider(config)
        if config.provider == "llama":
            return LLaMAProvider(config)
        raise ValueError(f"Unsupported LLM provider: {config.provider}")
