"""Tests for analysis data models."""

import dataclasses

import pytest

from devops_assistant.models.analysis import (
    AnalysisRequest,
    AnalysisResult,
    ErrorDetail,
    FileCategory,
)


class TestFileCategory:
    """Test FileCategory enum."""

    def test_default_is_first_member(self):
        """Test that the default category is the first declared one."""
        assert FileCategory.default() is FileCategory.ANSIBLE

    def test_lookup_by_display_value(self):
        """Test that categories are addressed by their display value."""
        assert FileCategory("Kubernetes Manifest") is FileCategory.KUBERNETES
        assert str(FileCategory.GITLAB_CI) == "GitLab CI"

    def test_unknown_value_rejected(self):
        """Test that unsupported file kinds are rejected."""
        with pytest.raises(ValueError):
            FileCategory("Makefile")


class TestAnalysisRequest:
    """Test AnalysisRequest dataclass."""

    def test_line_count(self):
        """Test line_count property."""
        test_cases = [
            ("", 0),
            ("FROM alpine", 1),
            ("FROM alpine\nRUN ls\n", 2),
        ]
        for text, expected in test_cases:
            request = AnalysisRequest(source_text=text, category=FileCategory.DOCKERFILE)
            assert request.line_count == expected

    def test_is_immutable(self):
        """Test that requests are frozen."""
        request = AnalysisRequest(source_text="x", category=FileCategory.BASH)
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.source_text = "y"  # type: ignore[misc]


class TestAnalysisResult:
    """Test AnalysisResult dataclass."""

    def test_error_count(self):
        """Test error_count property."""
        result = AnalysisResult(
            is_valid=False,
            errors=(
                ErrorDetail(line_number=1, error="Missing colon", explanation="..."),
                ErrorDetail(line_number=4, error="Bad indent", explanation="..."),
            ),
            corrected_code="fixed",
            best_practices=(),
        )
        assert result.error_count == 2

    def test_errors_keep_reported_order(self):
        """Test that errors are kept in the order the model reported them."""
        errors = (
            ErrorDetail(line_number=9, error="b", explanation=""),
            ErrorDetail(line_number=2, error="a", explanation=""),
        )
        result = AnalysisResult(
            is_valid=False, errors=errors, corrected_code="", best_practices=()
        )
        assert [e.line_number for e in result.errors] == [9, 2]

    @pytest.mark.parametrize(
        "is_valid,errors,expected",
        [
            (False, (), True),
            (False, (ErrorDetail(line_number=1, error="e", explanation="x"),), False),
            (True, (), False),
        ],
    )
    def test_is_inconsistent(self, is_valid, errors, expected):
        """Test detection of invalid results without error detail."""
        result = AnalysisResult(
            is_valid=is_valid, errors=errors, corrected_code="", best_practices=()
        )
        assert result.is_inconsistent is expected
