"""Shared test fixtures for DevOps Assistant."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from devops_assistant.config.schema import AppConfig, GeminiConfig, LLMConfig
from devops_assistant.models.analysis import AnalysisResult, ErrorDetail, FileCategory


class FakeAnalyzer:
    """Deterministic CodeAnalyzer returning a canned result or raising."""

    def __init__(
        self,
        result: AnalysisResult | None = None,
        error: BaseException | None = None,
    ) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, FileCategory | str]] = []

    @property
    def model_name(self) -> str:
        return "fake-model"

    async def analyze(self, source_text: str, category: FileCategory | str) -> AnalysisResult:
        self.calls.append((source_text, category))
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result


@dataclass
class FakeTimer:
    """Handle returned by FakeScheduler."""

    delay: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if not self.cancelled:
            self.callback()


@dataclass
class FakeScheduler:
    """Records scheduled callbacks instead of running them."""

    timers: list[FakeTimer] = field(default_factory=list)

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer


class RecordingClipboard:
    """Clipboard that remembers what was copied."""

    def __init__(self) -> None:
        self.copied: list[str] = []

    def copy(self, text: str) -> None:
        self.copied.append(text)


@pytest.fixture
def valid_result() -> AnalysisResult:
    """Result for a snippet the model found valid."""
    return AnalysisResult(
        is_valid=True,
        errors=(),
        corrected_code="x",
        best_practices=("a",),
    )


@pytest.fixture
def invalid_result() -> AnalysisResult:
    """Result with one reported error."""
    return AnalysisResult(
        is_valid=False,
        errors=(ErrorDetail(line_number=3, error="Bad indent", explanation="..."),),
        corrected_code="fixed",
        best_practices=("p1", "p2"),
    )


@pytest.fixture
def inconsistent_result() -> AnalysisResult:
    """Result flagged invalid without any error detail."""
    return AnalysisResult(
        is_valid=False,
        errors=(),
        corrected_code="",
        best_practices=(),
    )


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    """Scheduler that never fires on its own."""
    return FakeScheduler()


@pytest.fixture
def clipboard() -> RecordingClipboard:
    """Clipboard double."""
    return RecordingClipboard()


@pytest.fixture
def app_config() -> AppConfig:
    """Minimal valid configuration using the Gemini provider."""
    return AppConfig(
        llm=LLMConfig(
            provider="gemini",
            gemini=GeminiConfig(api_key="AIza-test-key"),
        )
    )


@pytest.fixture
def wire_payload_invalid() -> str:
    """Raw model output for an invalid snippet."""
    return (
        '{"isValid": false,'
        ' "errors": [{"lineNumber": 3, "error": "Bad indent", "explanation": "..."}],'
        ' "correctedCode": "fixed",'
        ' "bestPractices": ["p1", "p2"]}'
    )
