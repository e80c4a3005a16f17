"""Abstract interface for snippet analysis backends."""

from typing import Protocol

from ..models.analysis import AnalysisResult, FileCategory


class CodeAnalyzer(Protocol):
    """Contract every analysis backend (Gemini, Anthropic, test doubles) fulfils.

    Implementations are stateless: each call is independent, makes at most
    one outbound request and is never retried.
    """

    async def analyze(self, source_text: str, category: FileCategory | str) -> AnalysisResult:
        """
        Analyze a snippet for syntax errors and best practices.

        Args:
            source_text: Snippet to analyze. Callers guarantee it is not blank.
            category: Declared file kind, used only to tailor the instruction.

        Returns:
            Structured analysis result

        Raises:
            AnalysisError: On any failure (network, service, malformed or
                non-conforming response)
        """
        ...

    @property
    def model_name(self) -> str:
        """
        Return the model identifier being used.

        Examples:
            - "gemini-2.5-flash"
            - "claude-3-5-sonnet-20241022"
        """
        ...
