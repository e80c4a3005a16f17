"""Structured logging setup for the DevOps Assistant.

Provides:
- JSON or console rendering, selected by the ``logging`` config section
- A sanitizing processor so credentials pasted into snippets never reach
  log output
- Per-session context so every entry of one browser session can be grouped
- Optional file output next to stderr
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import structlog

from devops_assistant.utils.security import SecretRedactor

if TYPE_CHECKING:
    from devops_assistant.config.schema import LoggingConfig

SERVICE_NAME = "devops-assistant"
SESSION_ID_PREFIX_LENGTH = 8


class LogFormat(StrEnum):
    """Log output format options."""

    JSON = "json"
    CONSOLE = "console"


class LogLevel(StrEnum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


_redactor: SecretRedactor | None = None


def _get_redactor() -> SecretRedactor:
    """Return the process-wide redactor used for log output."""
    global _redactor
    if _redactor is None:
        _redactor = SecretRedactor(placeholder="[REDACTED]")
    return _redactor


def sanitize_log_value(value: Any) -> Any:
    """Remove credentials from a value about to be logged.

    Strings are redacted; dicts, lists and tuples are walked recursively and
    keep their type. Anything else is returned unchanged.

    Args:
        value: Value bound to a log entry (event text, snippet preview,
            error message, nested details)

    Returns:
        The value with every detected secret replaced by ``[REDACTED]``

    Raises:
        RedactionError: If a pattern fails while scanning a string.
    """
    redactor = _get_redactor()

    if isinstance(value, str):
        return redactor.redact(value)
    elif isinstance(value, dict):
        return {k: sanitize_log_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return type(value)(sanitize_log_value(v) for v in value)
    else:
        return value


def secret_sanitizer(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor that sanitizes every entry before rendering.

    Runs on every entry, including SDK error text that may quote the
    request payload.

    Args:
        logger: Wrapped logger (unused)
        method_name: Name of the log method called (unused)
        event_dict: Entry being processed

    Returns:
        Sanitized copy of the entry
    """
    result = sanitize_log_value(event_dict)
    return cast(MutableMapping[str, Any], result)


def add_context_processor(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Tag every entry with the service name and running version.

    Args:
        logger: Wrapped logger (unused)
        method_name: Name of the log method called (unused)
        event_dict: Entry being processed

    Returns:
        The entry with ``service`` and, when known, ``version`` set
    """
    event_dict["service"] = SERVICE_NAME

    try:
        from devops_assistant._version import __version__

        event_dict["version"] = __version__
    except (ImportError, RuntimeError):
        pass

    return event_dict


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    log_format: LogFormat | str = LogFormat.JSON,
    file_path: Path | str | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Called twice at startup: once from command line flags so config loading
    errors are readable, then again from the loaded ``logging`` section.
    Uvicorn and SDK loggers go through the same stdlib handlers.

    Args:
        level: Minimum level (case-insensitive when given as a string)
        log_format: ``json`` for aggregation, ``console`` for a terminal
        file_path: Also append entries to this file; None logs to stderr only

    Example:
        configure_logging(level="DEBUG", log_format="console")
    """
    if isinstance(level, str):
        level = LogLevel(level.upper())
    if isinstance(log_format, str):
        log_format = LogFormat(log_format.lower())

    numeric_level = getattr(logging, level.value)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_context_processor,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        secret_sanitizer,
        structlog.processors.format_exc_info,
    ]

    if log_format == LogFormat.JSON:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True, exception_formatter=structlog.dev.plain_traceback
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if file_path is not None:
        try:
            file_path = Path(file_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(file_path))
        except OSError as e:
            logging.getLogger("devops_assistant.logging").warning(
                "Could not open log file %s, logging to stderr only: %s", file_path, e
            )

    for handler in handlers:
        handler.setLevel(numeric_level)

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=handlers,
        force=True,
    )


def configure_from_config(config: LoggingConfig, *, debug: bool = False) -> None:
    """Apply the ``logging`` section of the application config.

    Args:
        config: Loaded logging section
        debug: Force DEBUG regardless of the configured level (``--debug``)
    """
    configure_logging(
        level=LogLevel.DEBUG if debug else config.level,
        log_format=config.format,
        file_path=config.file.path if config.file.enabled else None,
    )


def bind_session(session_id: str) -> None:
    """Make the current request's entries carry its session.

    Context left over from an earlier request is dropped first. Only a
    prefix of the id is logged; the full value is the session cookie.

    Args:
        session_id: Cookie value identifying the browser session

    Example:
        bind_session(session.session_id)
        log.info("analysis_requested")  # includes session="3f2a9c01"
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(session=session_id[:SESSION_ID_PREFIX_LENGTH])


class LogEventNames:
    """Event names shared across modules."""

    # Application lifecycle
    APP_STARTED = "app_started"
    APP_STOPPED = "app_stopped"

    # Sessions
    SESSION_CREATED = "session_created"

    # Analysis lifecycle
    ANALYSIS_REQUESTED = "analysis_requested"
    ANALYSIS_IGNORED = "analysis_ignored"
    ANALYSIS_COMPLETED = "analysis_completed"
    ANALYSIS_FAILED = "analysis_failed"
    ANALYSIS_INCONSISTENT = "analysis_inconsistent"

    # LLM calls
    LLM_REQUEST_START = "llm_request_start"
    LLM_REQUEST_COMPLETE = "llm_request_complete"
    LLM_REQUEST_ERROR = "llm_request_error"

    # Interaction
    FILE_LOADED = "file_loaded"
    CODE_COPIED = "code_copied"

    # Security
    SENSITIVE_DATA_REDACTED = "sensitive_data_redacted"

    # Health checks
    HEALTH_CHECK_START = "health_check_start"
    HEALTH_CHECK_COMPLETE = "health_check_complete"
