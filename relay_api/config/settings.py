from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    A configuration class for managing environment variables.

    Values are read once at process start and never mutated afterwards. An
    optional `.env` file in the working directory is loaded as well, so a
    local Ollama instance can be targeted without exporting anything.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    HOST: str = "0.0.0.0"
    PORT: int = 8080
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "llama3.2"
    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
