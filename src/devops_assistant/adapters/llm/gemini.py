"""Google Gemini adapter.

Implements the CodeAnalyzer protocol on top of the google-genai SDK, using
JSON structured output with a response schema and low temperature.
"""

from __future__ import annotations

import httpx
import structlog
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ...config.schema import GeminiConfig
from ...models.analysis import AnalysisResult, FileCategory
from ...utils.errors import AnalysisError
from ...utils.logging import LogEventNames
from ...utils.security import RedactionError, SecretRedactor
from .contract import (
    ANALYSIS_RESPONSE_SCHEMA,
    SYSTEM_PROMPT,
    build_analysis_prompt,
    parse_analysis_response,
)

log = structlog.get_logger()


class GeminiAdapter:
    """Gemini LLM adapter implementing the CodeAnalyzer protocol.

    Example:
        config = GeminiConfig(api_key="AIza...")
        adapter = GeminiAdapter(config)

        result = await adapter.analyze(dockerfile_text, FileCategory.DOCKERFILE)
        print(result.is_valid)
    """

    def __init__(
        self,
        config: GeminiConfig,
        redactor: SecretRedactor | None = None,
    ) -> None:
        """Initialize the Gemini adapter.

        Args:
            config: Gemini-specific configuration.
            redactor: Secret redactor applied to snippets before they are
                sent. If None, snippets are sent unchanged.
        """
        self._config = config
        self._redactor = redactor
        self._client = genai.Client(api_key=config.api_key)

    @property
    def model_name(self) -> str:
        """Return the model identifier being used."""
        return self._config.model

    def _redact_text(self, text: str) -> str:
        """Redact secrets from text, failing closed on error."""
        if self._redactor is None:
            return text
        try:
            redacted = self._redactor.redact(text)
        except RedactionError as e:
            log.error("redaction_failed_blocking_llm_call", error=str(e))
            raise AnalysisError(f"redaction failed: {e}") from e
        if redacted != text:
            log.info(LogEventNames.SENSITIVE_DATA_REDACTED, provider="gemini")
        return redacted

    def _generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=SYSTEM_PROMPT,
            response_mime_type="application/json",
            response_schema=ANALYSIS_RESPONSE_SCHEMA,
            temperature=self._config.temperature,
            max_output_tokens=self._config.max_output_tokens,
        )

    async def analyze(self, source_text: str, category: FileCategory | str) -> AnalysisResult:
        """Analyze a snippet for syntax errors and best practices.

        Args:
            source_text: Snippet to analyze (redacted before sending when a
                redactor is configured).
            category: Declared file kind.

        Returns:
            Structured analysis result.

        Raises:
            AnalysisError: On any failure. No retry is attempted.
        """
        prompt = build_analysis_prompt(self._redact_text(source_text), category)

        log.info(
            LogEventNames.LLM_REQUEST_START,
            provider="gemini",
            model=self._config.model,
            category=str(category),
            source_chars=len(source_text),
        )

        try:
            response = await self._client.aio.models.generate_content(
                model=self._config.model,
                contents=prompt,
                config=self._generation_config(),
            )
            response_text = response.text
        except genai_errors.APIError as e:
            log.error(LogEventNames.LLM_REQUEST_ERROR, provider="gemini", code=e.code, error=str(e))
            raise AnalysisError(f"Gemini API error: {e}") from e
        except httpx.TimeoutException as e:
            log.error(LogEventNames.LLM_REQUEST_ERROR, provider="gemini", error="timeout")
            raise AnalysisError(f"Gemini request timed out: {e}") from e
        except httpx.HTTPError as e:
            log.error(LogEventNames.LLM_REQUEST_ERROR, provider="gemini", error=str(e))
            raise AnalysisError(f"Network error talking to Gemini: {e}") from e
        except Exception as e:
            log.exception(LogEventNames.LLM_REQUEST_ERROR, provider="gemini", error=str(e))
            raise AnalysisError(str(e) or type(e).__name__) from e

        if not response_text:
            log.error(LogEventNames.LLM_REQUEST_ERROR, provider="gemini", error="empty_response")
            raise AnalysisError("Gemini returned an empty response")

        result = parse_analysis_response(response_text)

        log.info(
            LogEventNames.LLM_REQUEST_COMPLETE,
            provider="gemini",
            is_valid=result.is_valid,
            error_count=result.error_count,
        )
        return result
