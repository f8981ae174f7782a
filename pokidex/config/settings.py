"""
Application settings and configuration management.

Uses Pydantic Settings for validation and environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when a required setting is missing or invalid at startup."""


class LLMSettings(BaseSettings):
    """Text generation service configuration."""

    model: str = Field(
        default="gemini/gemini-2.0-flash",
        description="LiteLLM model string, e.g. 'gemini/gemini-2.0-flash', "
                    "'openai/gpt-4o', 'ollama/llama3'. The provider prefix tells LiteLLM "
                    "which API to route the request to.",
    )
    max_tokens: int = Field(default=1024, description="Maximum tokens in response")
    temperature: float = Field(default=0.3, description="Sampling temperature")
    api_key: str = Field(
        default="",
        description="Credential for the generation service. Read from GEMINI_API_KEY "
                    "or LLM_API_KEY.",
        validation_alias=AliasChoices("GEMINI_API_KEY", "LLM_API_KEY"),
    )

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )


class PokeApiSettings(BaseSettings):
    """PokéAPI lookup service configuration."""

    base_url: str = Field(
        default="https://pokeapi.co/api/v2", description="PokéAPI v2 root URL"
    )
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
    max_moves: int = Field(
        default=20, ge=1, description="Maximum moves rendered by the moves-only view"
    )

    model_config = SettingsConfigDict(
        env_prefix="POKEAPI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class ChatSettings(BaseSettings):
    """Interactive chat loop configuration."""

    user_prompt: str = Field(default="You: ", description="Prompt shown before user input")
    assistant_prefix: str = Field(
        default="Assistant: ", description="Prefix printed before each answer"
    )

    model_config = SettingsConfigDict(
        env_prefix="CHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class Settings(BaseSettings):
    """Main application settings."""

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Logging level"
    )
    log_file: Path | None = Field(default=None, description="Log file path")

    # Sub-configurations
    llm: LLMSettings = Field(default_factory=LLMSettings)
    pokeapi: PokeApiSettings = Field(default_factory=PokeApiSettings)
    chat: ChatSettings = Field(default_factory=ChatSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    def require_api_key(self) -> str:
        """
        Return the generation credential or fail.

        Raises:
            ConfigurationError: If no credential was supplied
        """
        if not self.llm.api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY environment variable not set. "
                "Export it or add GEMINI_API_KEY=<key> to your .env file."
            )
        return self.llm.api_key


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        env_file: Path to .env file (optional)

    Returns:
        Loaded settings instance
    """
    if env_file:
        return Settings(
            _env_file=env_file,
            llm=LLMSettings(_env_file=env_file),
            pokeapi=PokeApiSettings(_env_file=env_file),
            chat=ChatSettings(_env_file=env_file),
        )
    return Settings()
