from functools import lru_cache
from typing import Annotated, Any
import json
import os

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # API settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "CEP Service"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # CORS settings
    BACKEND_CORS_ORIGINS: Annotated[list[str], NoDecode] = ["*"]

    # Logging settings
    LOG_LEVEL: str = "INFO"
    ENABLE_STRUCTURED_LOGGING: bool = True

    # Provider settings
    ENABLED_PROVIDERS: Annotated[list[str], NoDecode] = ["brasilapi", "viacep"]
    PROVIDER_TIMEOUT: float = 1.0  # per provider attempt, seconds
    LOOKUP_TIMEOUT: float = 1.5  # whole race, seconds
    BRASILAPI_URL_TEMPLATE: str = "https://brasilapi.com.br/api/cep/v1/{postal_code}"
    VIACEP_URL_TEMPLATE: str = "http://viacep.com.br/ws/{postal_code}/json/"

    @field_validator("BACKEND_CORS_ORIGINS", "ENABLED_PROVIDERS", mode="before")
    @classmethod
    def split_comma_separated(cls, v: Any) -> list[str]:
        """Parse a list setting from a comma separated string or a list."""
        if isinstance(v, str) and v.startswith("["):
            return json.loads(v)
        elif isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        raise ValueError(v)


def load_env_file(env_file: str = ".env") -> None:
    """
    Load environment variables from specified .env file.

    Args:
        env_file: Path to the .env file. Defaults to ".env".
    """
    env_path = os.path.join(os.getcwd(), env_file)
    if os.path.exists(env_path):
        load_dotenv(env_path)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings with caching for efficiency.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
