"""Exception hierarchy for the DevOps Assistant."""

from __future__ import annotations


class AssistantError(Exception):
    """Base exception for all assistant errors."""


class AnalysisError(AssistantError):
    """Analyzing a snippet failed.

    Every failure of an analysis call (network, service, malformed or
    non-conforming response) surfaces as this single type. The message is
    meant to be shown to the user as-is.

    Attributes:
        cause: Short description of the underlying failure.
    """

    def __init__(self, cause: str) -> None:
        super().__init__(f"Failed to analyze code: {cause}")
        self.cause = cause