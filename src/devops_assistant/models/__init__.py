"""Data models and transfer objects."""

from .analysis import AnalysisRequest, AnalysisResult, ErrorDetail, FileCategory
from .session import Failed, Idle, Loading, ResultTab, SessionState, Succeeded

__all__ = [
    # Analysis models
    "FileCategory",
    "AnalysisRequest",
    "ErrorDetail",
    "AnalysisResult",
    # Session states
    "Idle",
    "Loading",
    "Succeeded",
    "Failed",
    "SessionState",
    "ResultTab",
]
