"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.analysis import FileCategory


def _require_api_key(v: str) -> str:
    if not v.strip():
        raise ValueError("API key must not be empty")
    return v


class GeminiConfig(BaseModel):
    """Google Gemini configuration."""

    api_key: str
    model: str = "gemini-2.5-flash"
    temperature: float = Field(0.2, ge=0.0, le=2.0)
    max_output_tokens: int | None = Field(None, ge=1)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Reject blank credentials."""
        return _require_api_key(v)


class AnthropicConfig(BaseModel):
    """Anthropic-specific configuration."""

    api_key: str
    model: str = "claude-3-5-sonnet-20241022"
    max_tokens: int = 4096
    temperature: float = Field(0.2, ge=0.0, le=1.0)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Reject blank credentials."""
        return _require_api_key(v)


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: Literal["gemini", "anthropic"] = "gemini"
    gemini: GeminiConfig | None = None
    anthropic: AnthropicConfig | None = None


class AnalysisConfig(BaseModel):
    """Snippet analysis configuration."""

    redact_secrets: bool = False
    max_source_chars: int = Field(100_000, ge=1)


class UIConfig(BaseModel):
    """Interactive page configuration."""

    copy_feedback_seconds: float = Field(2.0, gt=0.0, le=30.0)
    poll_interval_seconds: int = Field(1, ge=1, le=30)
    default_category: FileCategory = FileCategory.default()
    user_name: str | None = None


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = "127.0.0.1"
    port: int = Field(8000, ge=1, le=65535)
    session_ttl: int = Field(3600, ge=60, description="Idle session lifetime in seconds")
    max_sessions: int = Field(1000, ge=1)


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("/var/log/devops-assistant/app.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "json"
    file: FileLoggingConfig = FileLoggingConfig()


class AppConfig(BaseSettings):
    """Root configuration for DevOps Assistant."""

    llm: LLMConfig
    analysis: AnalysisConfig = AnalysisConfig()
    ui: UIConfig = UIConfig()
    server: ServerConfig = ServerConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
    )
