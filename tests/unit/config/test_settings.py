"""
Tests for settings loading and credential validation.
"""

import pytest

from pokidex.config.settings import (
    ConfigurationError,
    LLMSettings,
    PokeApiSettings,
    Settings,
    load_settings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run each test in an empty directory with no credential variables set."""
    for name in (
        "GEMINI_API_KEY", "LLM_API_KEY", "API_KEY", "LLM_MODEL",
        "POKEAPI_MAX_MOVES", "POKEAPI_BASE_URL", "CHAT_ASSISTANT_PREFIX", "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestLLMSettings:

    def test_defaults(self):
        settings = LLMSettings()
        assert settings.model == "gemini/gemini-2.0-flash"
        assert settings.api_key == ""

    def test_reads_gemini_api_key(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-gemini")
        assert LLMSettings().api_key == "from-gemini"

    def test_reads_llm_api_key(self, monkeypatch):
        monkeypatch.setenv("LLM_API_KEY", "from-llm")
        assert LLMSettings().api_key == "from-llm"

    def test_model_from_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("LLM_MODEL", "openai/gpt-4o")
        assert LLMSettings().model == "openai/gpt-4o"

    def test_explicit_value_wins(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        assert LLMSettings(api_key="explicit").api_key == "explicit"

    def test_unprefixed_api_key_is_not_the_credential(self, monkeypatch):
        monkeypatch.setenv("API_KEY", "some-other-tool")
        assert LLMSettings().api_key == ""


class TestPokeApiSettings:

    def test_max_moves_from_env(self, monkeypatch):
        monkeypatch.setenv("POKEAPI_MAX_MOVES", "7")
        assert PokeApiSettings().max_moves == 7

    def test_max_moves_must_be_positive(self):
        with pytest.raises(ValueError):
            PokeApiSettings(max_moves=0)


class TestSettings:

    def test_require_api_key_missing(self):
        with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
            Settings().require_api_key()

    def test_require_api_key_present(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "secret")
        assert Settings().require_api_key() == "secret"

    def test_load_settings_from_env_file(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("GEMINI_API_KEY=from-file\nLOG_LEVEL=DEBUG\n")

        settings = load_settings(env_file=env_file)

        assert settings.llm.api_key == "from-file"
        assert settings.log_level == "DEBUG"

    def test_default_env_file_is_read(self, tmp_path):
        (tmp_path / ".env").write_text("GEMINI_API_KEY=from-dotenv\n")
        assert load_settings().llm.api_key == "from-dotenv"

    def test_default_env_file_configures_every_section(self, tmp_path):
        (tmp_path / ".env").write_text(
            "GEMINI_API_KEY=k\n"
            "POKEAPI_MAX_MOVES=7\n"
            "POKEAPI_BASE_URL=https://pokeapi.test/api/v2\n"
            "CHAT_ASSISTANT_PREFIX=Pokidex:\n"
        )

        settings = load_settings()

        assert settings.pokeapi.max_moves == 7
        assert settings.pokeapi.base_url == "https://pokeapi.test/api/v2"
        assert settings.chat.assistant_prefix == "Pokidex:"

    def test_custom_env_file_configures_every_section(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("GEMINI_API_KEY=k\nPOKEAPI_MAX_MOVES=7\nCHAT_ASSISTANT_PREFIX=Pokidex:\n")

        settings = load_settings(env_file=env_file)

        assert settings.pokeapi.max_moves == 7
        assert settings.chat.assistant_prefix == "Pokidex:"
