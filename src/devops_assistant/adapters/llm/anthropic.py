"""Anthropic Claude adapter.

Implements the CodeAnalyzer protocol for Anthropic's Claude models. Claude
has no schema-enforced output mode here, so the JSON contract is carried in
the prompt and enforced by validating the reply.
"""

from __future__ import annotations

import anthropic
import structlog

from ...config.schema import AnthropicConfig
from ...models.analysis import AnalysisResult, FileCategory
from ...utils.errors import AnalysisError
from ...utils.logging import LogEventNames
from ...utils.security import RedactionError, SecretRedactor
from .contract import SYSTEM_PROMPT, build_analysis_prompt, parse_analysis_response

log = structlog.get_logger()


class AnthropicAdapter:
    """Anthropic LLM adapter implementing the CodeAnalyzer protocol.

    Example:
        config = AnthropicConfig(api_key="sk-ant-...")
        adapter = AnthropicAdapter(config)

        result = await adapter.analyze(workflow_yaml, FileCategory.GITHUB_ACTIONS)
    """

    def __init__(
        self,
        config: AnthropicConfig,
        redactor: SecretRedactor | None = None,
    ) -> None:
        """Initialize the Anthropic adapter.

        Args:
            config: Anthropic-specific configuration.
            redactor: Secret redactor applied to snippets before they are
                sent. If None, snippets are sent unchanged.
        """
        self._config = config
        self._redactor = redactor
        self._client = anthropic.AsyncAnthropic(api_key=config.api_key)

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
            log.info(LogEventNames.SENSITIVE_DATA_REDACTED, provider="anthropic")
        return redacted

    async def analyze(self, source_text: str, category: FileCategory | str) -> AnalysisResult:
        """Analyze a snippet for syntax errors and best practices.

        Raises:
            AnalysisError: On any failure. No retry is attempted.
        """
        user_content = build_analysis_prompt(self._redact_text(source_text), category)
        user_content += "\n\nDo not include any text outside the JSON object."

        log.info(
            LogEventNames.LLM_REQUEST_START,
            provider="anthropic",
            model=self._config.model,
            category=str(category),
            source_chars=len(source_text),
        )

        try:
            response = await self._client.messages.create(
                model=self._config.model,
                max_tokens=self._config.max_tokens,
                temperature=self._config.temperature,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": user_content}],
            )
        except anthropic.RateLimitError as e:
            log.warning(LogEventNames.LLM_REQUEST_ERROR, provider="anthropic", error="rate_limit")
            raise AnalysisError(f"Anthropic rate limit exceeded: {e}") from e
        except anthropic.APITimeoutError as e:
            log.error(LogEventNames.LLM_REQUEST_ERROR, provider="anthropic", error="timeout")
            raise AnalysisError(f"Anthropic request timed out: {e}") from e
        except anthropic.APIError as e:
            log.error(LogEventNames.LLM_REQUEST_ERROR, provider="anthropic", error=str(e))
            raise AnalysisError(f"Anthropic API error: {e}") from e
        except Exception as e:
            log.exception(LogEventNames.LLM_REQUEST_ERROR, provider="anthropic", error=str(e))
            raise AnalysisError(str(e) or type(e).__name__) from e

        response_text = ""
        for block in response.content:
            if hasattr(block, "text"):
                response_text += block.text

        if not response_text:
            raise AnalysisError("Anthropic returned an empty response")

        result = parse_analysis_response(response_text)

        log.info(
            LogEventNames.LLM_REQUEST_COMPLETE,
            provider="anthropic",
            is_valid=result.is_valid,
            error_count=result.error_count,
        )
        return result
