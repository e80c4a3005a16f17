"""Concrete implementations of provider interfaces."""

from .llm import AnthropicAdapter, GeminiAdapter, create_analyzer

__all__ = [
    "AnthropicAdapter",
    "GeminiAdapter",
    "create_analyzer",
]
