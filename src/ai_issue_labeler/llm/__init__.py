"""Model providers used to request label suggestions."""

from ai_issue_labeler.llm.factory import LLMFactory
from ai_issue_labeler.llm.provider import JsonSchema, LLMProvider

__all__ = ["JsonSchema", "LLMFactory", "LLMProvider"]
