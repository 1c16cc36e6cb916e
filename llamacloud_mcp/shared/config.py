# Environment-based settings for the LlamaCloud MCP server

from typing import Optional

from pydantic import Field, SecretStr, validator
from pydantic_settings import BaseSettings

DEFAULT_PROJECT_NAME = "Default"
API_KEY_ENV_VAR = "LLAMA_CLOUD_API_KEY"


class Settings(BaseSettings):
    """Environment-based settings"""

    # LlamaCloud
    project_name: str = Field(
        default=DEFAULT_PROJECT_NAME, alias="LLAMA_CLOUD_PROJECT_NAME"
    )
    api_key: Optional[SecretStr] = Field(default=None, alias=API_KEY_ENV_VAR)
    base_url: Optional[str] = Field(default=None, alias="LLAMA_CLOUD_BASE_URL")
    organization_id: Optional[str] = Field(
        default=None, alias="LLAMA_CLOUD_ORGANIZATION_ID"
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="console", alias="LOG_FORMAT")

    @validator("project_name")
    def default_blank_project_name(cls, v):
        """An empty LLAMA_CLOUD_PROJECT_NAME falls back to the default project"""
        if not v or not v.strip():
            return DEFAULT_PROJECT_NAME
        return v.strip()

    @validator("log_format")
    def validate_log_format(cls, v):
        v = v.strip().lower()
        if v not in {"console", "json"}:
            raise ValueError(f"log_format must be 'console' or 'json', got {v}")
        return v

    @property
    def has_api_key(self) -> bool:
        return self.api_key is not None and bool(
            self.api_key.get_secret_value().strip()
        )

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra environment variables


# Global settings instance (loaded once at startup)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global Settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload of settings from the environment and .env file."""
    global _settings
    _settings = Settings()
    return _settings
