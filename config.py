from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class LoggingConfig(BaseSettings):
    """Configuration for logging."""

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    log_format: str = "console"  # json, console
    log_file_path: Optional[Path] = Path("./logs/fake_filler.log")


class LLMSettings(BaseSettings):
    """LLM Configuration for the optional AI value generator."""

    model_config = SettingsConfigDict(frozen=True)

    LLM_ENABLED: bool = False
    LLM_PROVIDER: str = "openai"
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TIMEOUT: int = 30
    LLM_MAX_RETRIES: int = 2
    LLM_BASE_URL: Optional[str] = None
    LLM_TEMPERATURE: float = 0.7
    LLM_API_KEY: str = ""

    @field_validator("LLM_TEMPERATURE")
    @classmethod
    def temperature_must_be_in_range(cls, v: float) -> float:
        if not (0.0 <= v <= 2.0):
            raise ValueError("must be between 0.0 and 2.0")
        return v

    @model_validator(mode="after")
    def check_api_key_for_provider(self) -> "LLMSettings":
        if not self.LLM_ENABLED:
            return self
        if self.LLM_PROVIDER in ["openai", "anthropic", "google"] and not self.LLM_API_KEY:
            if self.LLM_BASE_URL and "localhost" in self.LLM_BASE_URL:
                return self
            raise ValueError(
                "LLM_API_KEY is required for openai/anthropic/google providers. Please set it in your .env file."
            )
        return self


class FillerConfig(BaseSettings):
    """Configuration for a fill pass run from the command line."""

    options_path: Path = Path("config/fill_options.yaml")
    browser_headless: bool = False
    keep_browser_open: bool = False
    navigation_timeout_ms: int = 30000
    ai_timeout_seconds: float = 20.0

    @field_validator("ai_timeout_seconds")
    @classmethod
    def timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("ai_timeout_seconds must be positive")
        return v


class AppConfig(BaseSettings):
    """Root configuration class for the application."""

    logging: LoggingConfig = LoggingConfig()
    llm: LLMSettings = LLMSettings()
    filler: FillerConfig = FillerConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Instantiate the main config object
config = AppConfig()
