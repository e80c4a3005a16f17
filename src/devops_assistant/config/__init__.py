"""Configuration loading and validation."""

from .loader import load_config
from .schema import (
    AnalysisConfig,
    AnthropicConfig,
    AppConfig,
    GeminiConfig,
    LLMConfig,
    LoggingConfig,
    ServerConfig,
    UIConfig,
)

__all__ = [
    # Loader
    "load_config",
    # Root config
    "AppConfig",
    # Top-level configs
    "LLMConfig",
    "AnalysisConfig",
    "UIConfig",
    "ServerConfig",
    "LoggingConfig",
    # Provider-specific configs
    "GeminiConfig",
    "AnthropicConfig",
]
