"""Core interaction logic.

- InteractionController: per-session snippet, category and request lifecycle
- render_result: maps a lifecycle state to the result panel view
"""

from devops_assistant.core.controller import InteractionController
from devops_assistant.core.views import (
    ErrorView,
    FindingsView,
    LoadingView,
    PlaceholderView,
    ResultView,
    TabView,
    ValidView,
    render_result,
)

__all__ = [
    "ErrorView",
    "FindingsView",
    "InteractionController",
    "LoadingView",
    "PlaceholderView",
    "ResultView",
    "TabView",
    "ValidView",
    "render_result",
]
