from dataclasses import dataclass
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"

DEFAULT_GENAI_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_GENAI_MODEL = "gemini-1.5-flash"


class MissingConfigurationError(Exception):
    """Raised when a required setting is absent at the point of use."""

    def __init__(self, message: str, setting: str | None = None):
        super().__init__(message)
        self.setting = setting


@dataclass(frozen=True, slots=True)
class GenerativeAIConfig:
    """Explicit endpoint configuration handed to the generative AI client."""

    api_key: str
    base_url: str = DEFAULT_GENAI_BASE_URL
    model: str = DEFAULT_GENAI_MODEL
    timeout_seconds: float = 60.0

    def endpoint_url(self) -> str:
        base = self.base_url.rstrip("/")
        return f"{base}/v1/models/{self.model}:generateContent"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    LOG_LEVEL: str = "INFO"

    # Database settings
    DATABASE_URL: str = "postgresql://localhost:5432/account_insights"

    # Generative AI settings
    GENAI_API_KEY: str | None = None
    GENAI_BASE_URL: str = DEFAULT_GENAI_BASE_URL
    GENAI_MODEL: str = DEFAULT_GENAI_MODEL
    GENAI_TIMEOUT_SECONDS: float = 60.0

    # Activity summary settings
    ACTIVITY_QUERY_LIMIT: int = Field(default=10, gt=0)

    # Lead SLA settings
    SLA_WINDOW_MINUTES: int = Field(default=30, gt=0)

    # =================================================================
    # DATABASE POOL SETTINGS
    # =================================================================
    DB_POOL_MIN_SIZE: int = 2
    DB_POOL_MAX_SIZE: int = 10
    DB_POOL_TIMEOUT: float = 30.0
    DB_POOL_MAX_IDLE: float = 600.0  # 10 minutes
    DB_POOL_MAX_LIFETIME: float = 3600.0  # 1 hour

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def generative_ai_config(self) -> GenerativeAIConfig:
        """
        Build the generative AI client configuration.

        Raises:
            MissingConfigurationError: If GENAI_API_KEY is not set
        """
        if not self.GENAI_API_KEY:
            raise MissingConfigurationError(
                "Generative AI API key is not configured (GENAI_API_KEY)",
                setting="GENAI_API_KEY",
            )
        return GenerativeAIConfig(
            api_key=self.GENAI_API_KEY,
            base_url=self.GENAI_BASE_URL,
            model=self.GENAI_MODEL,
            timeout_seconds=self.GENAI_TIMEOUT_SECONDS,
        )

    def get_db_pool_config(self) -> dict:
        """
        Get database pool configuration.
        Adjust environment-specific settings based on self.environment.
        """
        config = {
            "min_size": self.DB_POOL_MIN_SIZE,
            "max_size": self.DB_POOL_MAX_SIZE,
            "timeout": self.DB_POOL_TIMEOUT,
            "max_idle": self.DB_POOL_MAX_IDLE,
            "max_lifetime": self.DB_POOL_MAX_LIFETIME,
        }

        if self.environment == "development":
            config.update(
                {
                    "min_size": 1,
                    "max_size": 4,
                    "timeout": 15.0,
                }
            )

        return config


settings = Settings()
