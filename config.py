"""
Configuration management using Pydantic Settings
"""
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL = "gemini-2.5-flash"

# Some OpenAI-compatible gateways reject requests without a browser User-Agent.
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class ConfigError(RuntimeError):
    """Raised when a required environment variable is missing."""


class Settings(BaseSettings):
    """Application settings, read from OPENAI_API_KEY, OPENAI_BASE_URL, PROMPT_MODEL and LOG_LEVEL"""

    model_config = SettingsConfigDict(frozen=True, env_ignore_empty=True)

    openai_api_key: str
    openai_base_url: str
    prompt_model: str = DEFAULT_MODEL
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()


def load_settings() -> Settings:
    """Reads the service credential and endpoint from the environment."""
    try:
        return Settings()
    except ValidationError as e:
        missing = ", ".join(str(err["loc"][0]).upper() for err in e.errors())
        raise ConfigError(f"{missing} environment variable not set") from e
