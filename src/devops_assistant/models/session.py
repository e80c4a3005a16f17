"""Lifecycle states of an interactive analysis session.

A session is always in exactly one of these states. Each state carries only
the data that is meaningful for it, so combinations such as "loading with a
stale error" cannot be expressed.
"""

from dataclasses import dataclass
from enum import StrEnum

from .analysis import AnalysisRequest, AnalysisResult


class ResultTab(StrEnum):
    """Selectable views of an invalid result."""

    ERRORS = "errors"
    CORRECTED = "corrected"
    PRACTICES = "practices"


@dataclass(frozen=True)
class Idle:
    """Nothing has been analyzed yet."""


@dataclass(frozen=True)
class Loading:
    """An analysis call is in flight."""

    request: AnalysisRequest


@dataclass(frozen=True)
class Succeeded:
    """The last call returned a result."""

    result: AnalysisResult
    advisory: str | None = None  # Shown alongside the result, not instead of it


@dataclass(frozen=True)
class Failed:
    """The last call failed."""

    message: str


SessionState = Idle | Loading | Succeeded | Failed
