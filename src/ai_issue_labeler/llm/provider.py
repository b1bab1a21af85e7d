"""Model service boundary.

The labeler only needs one thing from a model: a text reply to a prompt. The
reply is untrusted; :mod:`ai_issue_labeler.labeling.parser` decides what it means.
"""

from abc import ABC, abstractmethod
from typing import Any

JsonSchema = dict[str, Any]


class LLMProvider(ABC):
    """A pluggable text-generation backend (OpenAI, local llama.cpp)."""

    @abstractmethod
    def generate(
        self,
        prompt: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
        response_schema: JsonSchema | None = None,
        **kwargs: Any,
    ) -> str:
        """Return the model's reply to a single prompt.

        Args:
            prompt: The full labeling prompt.
            max_tokens: Upper bound on the reply length.
            temperature: Sampling temperature; provider default when None.
            response_schema: JSON schema for the reply. Backends that support
                constrained output use it; others ignore it, so callers still
                parse the reply defensively.

        Returns:
            The raw reply text (possibly empty).
        """
