"""Configuration for the issue labeler.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

To avoid collisions with the `GITHUB_TOKEN` that Actions injects into every step,
the labeler reads its token from a dedicated variable: `LABELER_GITHUB_TOKEN`.
Workflows typically map `secrets.GITHUB_TOKEN` onto it.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_HEX_COLOR = re.compile(r"^[0-9a-fA-F]{6}$")
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class LLMConfig(BaseSettings):
    """Configuration for LLM providers."""

    provider: Literal["openai", "llama"] = Field(
        default="openai",
        description="LLM provider to use",
    )

    # OpenAI settings
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LABELER_LLM_OPENAI_API_KEY", "OPENAI_API_KEY"),
        description="OpenAI API key",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model to use",
    )
    openai_temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        description="Temperature for OpenAI model",
    )

    # LLaMA settings
    llama_model_path: Path | None = Field(
        default=None,
        description="Path to LLaMA model file",
    )
    llama_n_ctx: int = Field(
        default=4096,
        gt=0,
        description="Context window size for LLaMA",
    )
    llama_n_threads: int | None = Field(
        default=None,
        description="Number of threads for LLaMA (None = auto)",
    )

    model_config = SettingsConfigDict(
        env_prefix="LABELER_LLM_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


class LabelerSettings(BaseSettings):
    """Settings for a single labeling run.

    Environment variables:
    - LABELER_GITHUB_TOKEN
    - LABELER_MAX_EXISTING_LABELS   (optional, default 5)
    - LABELER_MAX_NEW_LABELS        (optional, default 2)
    - LABELER_LABEL_COLOR           (optional; random colors when unset)
    - LABELER_STRUCTURED_OUTPUT     (optional, default true)
    - GITHUB_BASE_URL               (optional)
    - LOG_LEVEL                     (optional)
    - GITHUB_EVENT_PATH, GITHUB_REPOSITORY, GITHUB_OUTPUT (set by Actions)

    Model settings live in :class:`LLMConfig` (`LABELER_LLM_*`).

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `LabelerSettings(_env_file=path_to_env)`.
    """

    # Empty default keeps `LabelerSettings()` type-clean; the validator below enforces it.
    github_token: str = Field(
        default="",
        validation_alias="LABELER_GITHUB_TOKEN",
        description="GitHub token used for label and issue API calls",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    max_existing_labels: int = Field(
        default=5,
        gt=0,
        validation_alias="LABELER_MAX_EXISTING_LABELS",
        description="Maximum number of existing labels the model may suggest",
    )
    max_new_labels: int = Field(
        default=2,
        ge=0,
        validation_alias="LABELER_MAX_NEW_LABELS",
        description="Maximum number of new labels the model may suggest",
    )

    label_color: str | None = Field(
        default=None,
        validation_alias="LABELER_LABEL_COLOR",
        description="Fixed hex color for created labels; random colors when unset",
    )
    structured_output: bool = Field(
        default=True,
        validation_alias="LABELER_STRUCTURED_OUTPUT",
        description="Ask the model service for schema-constrained output when it supports it",
    )

    event_path: Path | None = Field(
        default=None,
        validation_alias="GITHUB_EVENT_PATH",
        description="Path of the triggering event payload (set by GitHub Actions)",
    )
    repository: str | None = Field(
        default=None,
        validation_alias="GITHUB_REPOSITORY",
        description="Repository in the form 'owner/repo' (set by GitHub Actions)",
    )
    output_path: Path | None = Field(
        default=None,
        validation_alias="GITHUB_OUTPUT",
        description="Step output file (set by GitHub Actions)",
    )

    llm: LLMConfig = Field(
        default_factory=LLMConfig,
        description="LLM configuration",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip().upper()
            if value not in _LOG_LEVELS:
                raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")
        return value

    @field_validator("label_color", mode="before")
    @classmethod
    def _normalize_label_color(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip().lstrip("#")
            if not value:
                return None
            if not _HEX_COLOR.match(value):
                raise ValueError("LABELER_LABEL_COLOR must be a 6-digit hex color")
            return value.lower()
        return value

    @model_validator(mode="after")
    def _require_credentials(self) -> LabelerSettings:
        if not self.github_token.strip():
            raise ValueError("LABELER_GITHUB_TOKEN is required")
        if self.llm.provider == "openai" and not (self.llm.openai_api_key or "").strip():
            raise ValueError("LABELER_LLM_OPENAI_API_KEY (or OPENAI_API_KEY) is required")
        if self.llm.provider == "llama" and self.llm.llama_model_path is None:
            raise ValueError("LABELER_LLM_LLAMA_MODEL_PATH is required for the llama provider")
        return self
