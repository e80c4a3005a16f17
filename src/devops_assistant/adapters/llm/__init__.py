"""LLM-backed implementations of the CodeAnalyzer protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from ...utils.security import SecretRedactor
from .anthropic import AnthropicAdapter
from .gemini import GeminiAdapter

if TYPE_CHECKING:
    from ...config.schema import AppConfig
    from ...interfaces.analyzer import CodeAnalyzer

log = structlog.get_logger()


def create_analyzer(config: AppConfig) -> CodeAnalyzer:
    """Build the analyzer for the configured provider.

    Raises:
        ValueError: If the selected provider has no configuration section.
    """
    redactor = SecretRedactor() if config.analysis.redact_secrets else None
    provider = config.llm.provider

    analyzer: CodeAnalyzer
    if provider == "gemini":
        if config.llm.gemini is None:
            raise ValueError("Gemini provider selected but gemini config missing")
        analyzer = GeminiAdapter(config.llm.gemini, redactor=redactor)
    elif provider == "anthropic":
        if config.llm.anthropic is None:
            raise ValueError("Anthropic provider selected but anthropic config missing")
        analyzer = AnthropicAdapter(config.llm.anthropic, redactor=redactor)
    else:
        raise ValueError(f"Unknown LLM provider: {provider}")

    log.info("analyzer_created", provider=provider, model=analyzer.model_name)
    return analyzer


__all__ = ["AnthropicAdapter", "GeminiAdapter", "create_analyzer"]
