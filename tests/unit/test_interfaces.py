"""Tests for protocol interfaces."""

from devops_assistant.adapters.llm.gemini import GeminiAdapter
from devops_assistant.interfaces.analyzer import CodeAnalyzer
from devops_assistant.interfaces.clipboard import Clipboard
from devops_assistant.models.analysis import AnalysisResult, FileCategory
from devops_assistant.web.sessions import BrowserClipboard
from tests.conftest import FakeAnalyzer, RecordingClipboard


class MockCodeAnalyzer:
    """Minimal CodeAnalyzer for protocol compliance checks."""

    @property
    def model_name(self) -> str:
        return "mock"

    async def analyze(self, source_text: str, category: FileCategory | str) -> AnalysisResult:
        return AnalysisResult(is_valid=True, errors=(), corrected_code=source_text, best_practices=())


class TestCodeAnalyzerProtocol:
    """Test that analyzers satisfy the CodeAnalyzer protocol."""

    def test_mock_analyzer_is_accepted(self) -> None:
        """Test assigning a structural implementation to the protocol type."""
        analyzer: CodeAnalyzer = MockCodeAnalyzer()
        assert analyzer.model_name == "mock"

    async def test_mock_analyzer_returns_result(self) -> None:
        """Test the analyze signature end to end."""
        analyzer: CodeAnalyzer = MockCodeAnalyzer()
        result = await analyzer.analyze("FROM alpine", FileCategory.DOCKERFILE)
        assert result.is_valid is True
        assert result.corrected_code == "FROM alpine"

    def test_adapters_expose_protocol_members(self) -> None:
        """Test that real adapters and test doubles expose the protocol members."""
        for cls in (GeminiAdapter, FakeAnalyzer):
            assert callable(getattr(cls, "analyze"))
            assert isinstance(getattr(cls, "model_name"), property)


class TestClipboardProtocol:
    """Test that clipboards satisfy the Clipboard protocol."""

    def test_implementations(self) -> None:
        """Test both clipboard implementations accept copied text."""
        recording: Clipboard = RecordingClipboard()
        browser: Clipboard = BrowserClipboard()

        recording.copy("text")
        browser.copy("text")

        assert recording.copied == ["text"]  # type: ignore[attr-defined]
