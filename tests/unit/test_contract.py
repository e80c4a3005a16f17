"""Tests for the LLM prompt and response contract."""

from __future__ import annotations

import json

import pytest

from devops_assistant.adapters.llm.contract import (
    ANALYSIS_RESPONSE_SCHEMA,
    MAX_RESPONSE_LENGTH,
    AnalysisResponse,
    build_analysis_prompt,
    parse_analysis_response,
    strip_code_fences,
)
from devops_assistant.models.analysis import ErrorDetail, FileCategory
from devops_assistant.utils.errors import AnalysisError


class TestBuildAnalysisPrompt:
    """Test prompt construction."""

    def test_includes_category_and_source(self) -> None:
        """Test that the prompt names the file kind and embeds the snippet."""
        prompt = build_analysis_prompt("FROM alpine\nRUN ls", FileCategory.DOCKERFILE)

        assert "Dockerfile code snippet" in prompt
        assert "FROM alpine\nRUN ls" in prompt
        assert "best practices for this Dockerfile" in prompt

    def test_requests_all_fields(self) -> None:
        """Test that every response field is requested."""
        prompt = build_analysis_prompt("x", FileCategory.TERRAFORM)
        for key in ("isValid", "errors", "lineNumber", "correctedCode", "bestPractices"):
            assert key in prompt

    def test_accepts_plain_string_category(self) -> None:
        """Test that a display string works as category."""
        assert "Helm Chart code snippet" in build_analysis_prompt("x", "Helm Chart")


class TestResponseSchema:
    """Test the structured-output schema."""

    def test_all_fields_required(self) -> None:
        """Test that the four top-level fields are required."""
        assert set(ANALYSIS_RESPONSE_SCHEMA["required"]) == {
            "isValid",
            "errors",
            "correctedCode",
            "bestPractices",
        }

    def test_schema_matches_model_aliases(self) -> None:
        """Test that schema keys match the validation model aliases."""
        aliases = {f.alias or name for name, f in AnalysisResponse.model_fields.items()}
        assert aliases == set(ANALYSIS_RESPONSE_SCHEMA["properties"])


class TestStripCodeFences:
    """Test Markdown fence removal."""

    @pytest.mark.parametrize(
        "raw",
        [
            '{"a": 1}',
            '```json\n{"a": 1}\n```',
            '```\n{"a": 1}\n```',
            '  ```json\n{"a": 1}```  ',
        ],
    )
    def test_strips_surrounding_fence(self, raw: str) -> None:
        """Test that fenced and bare payloads yield the same JSON text."""
        assert strip_code_fences(raw) == '{"a": 1}'

    def test_inner_fences_untouched(self) -> None:
        """Test that fences inside a JSON string are preserved."""
        raw = '{"correctedCode": "```yaml\\nkey: v\\n```"}'
        assert strip_code_fences(raw) == raw


class TestParseAnalysisResponse:
    """Test response parsing and validation."""

    def test_parses_invalid_snippet(self, wire_payload_invalid: str) -> None:
        """Test parsing a payload reporting one error."""
        result = parse_analysis_response(wire_payload_invalid)

        assert result.is_valid is False
        assert result.errors == (ErrorDetail(line_number=3, error="Bad indent", explanation="..."),)
        assert result.corrected_code == "fixed"
        assert result.best_practices == ("p1", "p2")

    def test_parses_valid_snippet(self) -> None:
        """Test parsing a payload for a valid snippet."""
        payload = json.dumps(
            {"isValid": True, "errors": [], "correctedCode": "x", "bestPractices": ["a"]}
        )
        result = parse_analysis_response(payload)

        assert result.is_valid is True
        assert result.errors == ()
        assert result.best_practices == ("a",)

    def test_parses_fenced_payload(self, wire_payload_invalid: str) -> None:
        """Test that a fenced payload is accepted."""
        result = parse_analysis_response(f"```json\n{wire_payload_invalid}\n```")
        assert result.error_count == 1

    def test_preserves_error_order(self) -> None:
        """Test that errors keep the order the model reported."""
        payload = json.dumps(
            {
                "isValid": False,
                "errors": [
                    {"lineNumber": 7, "error": "b", "explanation": ""},
                    {"lineNumber": 2, "error": "a", "explanation": ""},
                ],
                "correctedCode": "",
                "bestPractices": [],
            }
        )
        result = parse_analysis_response(payload)
        assert [e.line_number for e in result.errors] == [7, 2]

    def test_invalid_json(self) -> None:
        """Test that non-JSON output raises AnalysisError."""
        with pytest.raises(AnalysisError, match="Invalid JSON in LLM response"):
            parse_analysis_response("Sure! Here is my analysis.")

    @pytest.mark.parametrize(
        "payload",
        [
            {"isValid": True, "errors": [], "correctedCode": "x"},
            {"isValid": False, "errors": [{"lineNumber": 1, "error": "e"}], "correctedCode": "", "bestPractices": []},
            {"isValid": False, "errors": [{"lineNumber": 0, "error": "e", "explanation": ""}], "correctedCode": "", "bestPractices": []},
            {"isValid": True, "errors": "none", "correctedCode": "x", "bestPractices": []},
            {"isValid": "false", "errors": [], "correctedCode": "x", "bestPractices": []},
            {"isValid": False, "errors": [{"lineNumber": "3", "error": "e", "explanation": ""}], "correctedCode": "", "bestPractices": []},
            {"isValid": False, "errors": [{"lineNumber": 2.0, "error": "e", "explanation": ""}], "correctedCode": "", "bestPractices": []},
            {"isValid": 0, "errors": [], "correctedCode": "x", "bestPractices": []},
            [1, 2, 3],
        ],
    )
    def test_nonconforming_payload(self, payload: object) -> None:
        """Test that missing fields, bad types and bad lines are rejected."""
        with pytest.raises(AnalysisError, match="LLM response failed validation"):
            parse_analysis_response(json.dumps(payload))

    def test_too_long(self) -> None:
        """Test that oversized responses are rejected before parsing."""
        with pytest.raises(AnalysisError, match="exceeds maximum length"):
            parse_analysis_response(" " * (MAX_RESPONSE_LENGTH + 1))

    def test_error_message_prefix(self) -> None:
        """Test that contract failures carry the user-facing prefix."""
        with pytest.raises(AnalysisError) as exc_info:
            parse_analysis_response("nope")
        assert str(exc_info.value).startswith("Failed to analyze code: ")
