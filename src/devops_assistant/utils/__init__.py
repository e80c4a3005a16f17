"""Utility functions and helpers.

- errors: Exception hierarchy
- security: Secret redaction
- logging: Structured logging with secret sanitization
- health: Health check utilities
"""

from devops_assistant.utils.errors import AnalysisError, AssistantError
from devops_assistant.utils.health import (
    HealthChecker,
    HealthReport,
    HealthStatus,
)
from devops_assistant.utils.logging import (
    LogEventNames,
    LogFormat,
    LogLevel,
    bind_session,
    configure_from_config,
    configure_logging,
)
from devops_assistant.utils.security import (
    RedactionError,
    SecretRedactor,
    SecurityError,
)

__all__ = [
    # Errors
    "AnalysisError",
    "AssistantError",
    # Health
    "HealthChecker",
    "HealthReport",
    "HealthStatus",
    # Logging
    "LogEventNames",
    "LogFormat",
    "LogLevel",
    "bind_session",
    "configure_from_config",
    "configure_logging",
    # Security
    "RedactionError",
    "SecretRedactor",
    "SecurityError",
]
