"""Data models for snippet analysis."""

from dataclasses import dataclass
from enum import StrEnum


class FileCategory(StrEnum):
    """Kinds of DevOps files the assistant knows how to review."""

    ANSIBLE = "Ansible Playbook"
    DOCKERFILE = "Dockerfile"
    DOCKER_COMPOSE = "Docker Compose"
    KUBERNETES = "Kubernetes Manifest"
    HELM = "Helm Chart"
    TERRAFORM = "Terraform"
    JENKINSFILE = "Jenkinsfile"
    GITHUB_ACTIONS = "GitHub Actions Workflow"
    GITLAB_CI = "GitLab CI"
    BASH = "Bash Script"

    @classmethod
    def default(cls) -> "FileCategory":
        """Return the category selected when a session starts."""
        return next(iter(cls))


@dataclass(frozen=True)
class AnalysisRequest:
    """A single snippet submitted for analysis."""

    source_text: str
    category: FileCategory

    @property
    def line_count(self) -> int:
        """Number of lines in the submitted snippet."""
        return len(self.source_text.splitlines())


@dataclass(frozen=True)
class ErrorDetail:
    """One issue reported by the model."""

    line_number: int  # 1-based
    error: str  # Short label, e.g. "Indentation error"
    explanation: str


@dataclass(frozen=True)
class AnalysisResult:
    """Structured outcome of analyzing a snippet."""

    is_valid: bool
    errors: tuple[ErrorDetail, ...]
    corrected_code: str
    best_practices: tuple[str, ...]

    @property
    def error_count(self) -> int:
        """Number of reported errors."""
        return len(self.errors)

    @property
    def is_inconsistent(self) -> bool:
        """True when the model flagged the snippet invalid without any detail."""
        return not self.is_valid and not self.errors
