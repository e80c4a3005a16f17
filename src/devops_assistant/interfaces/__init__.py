"""Protocol definitions for pluggable adapters."""

from .analyzer import CodeAnalyzer
from .clipboard import Clipboard

__all__ = ["Clipboard", "CodeAnalyzer"]
