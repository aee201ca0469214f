"""
Completion provider configuration settings.

API keys, model identifiers and generation parameters for the chat
completion backends.

Dependencies: pydantic, pydantic_settings
System role: LLM provider configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class LLMSettings(BaseSettings):
    """Completion provider configuration."""

    default_provider: str | None = Field(
        default=None,
        description="Provider used when a request does not name one",
    )

    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LLM_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        validation_alias=AliasChoices("LLM_OPENAI_MODEL", "OPENAI_MODEL"),
    )

    deepseek_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LLM_DEEPSEEK_API_KEY", "DEEPSEEK_API_KEY"),
    )
    deepseek_model: str = Field(default="deepseek-chat")
    deepseek_base_url: str = Field(default="https://api.deepseek.com/v1")

    google_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LLM_GOOGLE_API_KEY", "GOOGLE_API_KEY"),
    )
    gemini_model: str = Field(default="gemini-2.5-flash")

    temperature: float = Field(default=0.1, description="Sampling temperature")
    max_tokens: int = Field(default=2000, description="Maximum completion tokens")
    history_window: int = Field(
        default=10,
        description="Number of prior session messages sent with each turn",
    )

    class Config:
        """Pydantic config."""

        env_prefix = "LLM_"
        case_sensitive = False
        populate_by_name = True
