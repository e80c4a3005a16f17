"""Health check utilities.

Checks that the service can serve analyses:
- Configuration is complete
- The selected LLM provider has a credential and model

No outbound call is made; provider reachability is only observable through
real analysis requests.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

import structlog

from devops_assistant.utils.logging import LogEventNames

if TYPE_CHECKING:
    from devops_assistant.config.schema import AppConfig

log = structlog.get_logger()


class HealthStatus(StrEnum):
    """Health check status values."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"


@dataclass
class CheckResult:
    """Result of a single health check."""

    name: str
    status: HealthStatus
    message: str
    latency_ms: float | None = None
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class HealthReport:
    """Overall health report."""

    healthy: bool
    status: HealthStatus
    timestamp: datetime
    checks: list[CheckResult]
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "healthy": self.healthy,
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
            "checks": [
                {
                    "name": c.name,
                    "status": c.status.value,
                    "message": c.message,
                    "latency_ms": c.latency_ms,
                    "details": c.details,
                }
                for c in self.checks
            ],
            "details": self.details,
        }


class HealthChecker:
    """Performs health checks on configuration and the LLM provider.

    Example:
        checker = HealthChecker(config)
        report = await checker.run_all_checks()
        if not report.healthy:
            print(report.to_dict())
    """

    def __init__(self, config: AppConfig) -> None:
        self._config = config

    async def run_all_checks(self) -> HealthReport:
        """Run all health checks and return a report."""
        log.info(LogEventNames.HEALTH_CHECK_START)
        start_time = datetime.now(UTC)

        checks: list[CheckResult] = []

        results = await asyncio.gather(
            self._check_config(),
            self._check_llm_provider(),
            return_exceptions=True,
        )

        for result in results:
            if isinstance(result, BaseException):
                checks.append(
                    CheckResult(
                        name="unknown",
                        status=HealthStatus.UNHEALTHY,
                        message=f"Check failed with exception: {result}",
                    )
                )
            else:
                checks.append(result)

        if all(c.status == HealthStatus.HEALTHY for c in checks):
            overall_status = HealthStatus.HEALTHY
            healthy = True
        elif any(c.status == HealthStatus.UNHEALTHY for c in checks):
            overall_status = HealthStatus.UNHEALTHY
            healthy = False
        else:
            overall_status = HealthStatus.DEGRADED
            healthy = True

        report = HealthReport(
            healthy=healthy,
            status=overall_status,
            timestamp=start_time,
            checks=checks,
            details={
                "total_checks": len(checks),
                "healthy_checks": sum(1 for c in checks if c.status == HealthStatus.HEALTHY),
                "unhealthy_checks": sum(1 for c in checks if c.status == HealthStatus.UNHEALTHY),
            },
        )

        log.info(
            LogEventNames.HEALTH_CHECK_COMPLETE,
            healthy=healthy,
            status=overall_status.value,
            checks_run=len(checks),
        )

        return report

    async def _check_config(self) -> CheckResult:
        """Check configuration validity."""
        if not self._config.llm.provider:
            return CheckResult(
                name="config",
                status=HealthStatus.UNHEALTHY,
                message="LLM provider not configured",
            )

        return CheckResult(
            name="config",
            status=HealthStatus.HEALTHY,
            message="Configuration valid",
            details={
                "llm_provider": self._config.llm.provider,
                "redact_secrets": self._config.analysis.redact_secrets,
            },
        )

    async def _check_llm_provider(self) -> CheckResult:
        """Check that the selected provider has a usable credential."""
        provider = self._config.llm.provider

        if provider == "gemini":
            provider_config: Any = self._config.llm.gemini
        elif provider == "anthropic":
            provider_config = self._config.llm.anthropic
        else:
            return CheckResult(
                name="llm_provider",
                status=HealthStatus.UNHEALTHY,
                message=f"Unknown LLM provider: {provider}",
            )

        label = provider.capitalize()
        if provider_config is None:
            return CheckResult(
                name="llm_provider",
                status=HealthStatus.UNHEALTHY,
                message=f"{label} configuration not found",
            )

        api_key = provider_config.api_key
        if not api_key or api_key.startswith("${"):
            return CheckResult(
                name="llm_provider",
                status=HealthStatus.UNHEALTHY,
                message=f"{label} API key not configured",
            )

        return CheckResult(
            name="llm_provider",
            status=HealthStatus.HEALTHY,
            message=f"{label} configured",
            details={"provider": provider, "model": provider_config.model},
        )
