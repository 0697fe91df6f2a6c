import pytest
from pydantic import ValidationError

from relay_api.config.settings import Settings, get_settings

ENV_VARS = ("HOST", "PORT", "OLLAMA_BASE_URL", "OLLAMA_MODEL", "LOG_LEVEL")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(clean_env):
    settings = Settings(_env_file=None)

    assert settings.HOST == "0.0.0.0"
    assert settings.PORT == 8080
    assert settings.OLLAMA_BASE_URL == "http://localhost:11434"
    assert settings.OLLAMA_MODEL == "llama3.2"
    assert settings.LOG_LEVEL == "INFO"


def test_reads_environment(clean_env, monkeypatch):
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("OLLAMA_BASE_URL", "http://ollama:11434")
    monkeypatch.setenv("OLLAMA_MODEL", "qwen3:0.6b")

    settings = Settings(_env_file=None)

    assert settings.PORT == 9000
    assert settings.OLLAMA_BASE_URL == "http://ollama:11434"
    assert settings.OLLAMA_MODEL == "qwen3:0.6b"


def test_reads_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("OLLAMA_MODEL=mistral\nPORT=8081\n")

    settings = Settings(_env_file=env_file)

    assert settings.OLLAMA_MODEL == "mistral"
    assert settings.PORT == 8081


def test_invalid_port_is_rejected(clean_env, monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_are_immutable(clean_env):
    settings = Settings(_env_file=None)

    with pytest.raises(ValidationError):
        settings.OLLAMA_MODEL = "other"


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
