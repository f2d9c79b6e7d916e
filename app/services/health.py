"""
Readiness checks for the database and an external web dependency.

Each check returns a ``HealthCheckResult``; a check never raises. The report
status is the worst status among its results.
"""
import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Any

import httpx
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.config import Settings

logger = logging.getLogger(__name__)

RETRYABLE_EXCEPTIONS = (
    httpx.ConnectTimeout,
    httpx.ReadTimeout,
    httpx.ConnectError,
    httpx.RemoteProtocolError,
)


class HealthStatus(str, enum.Enum):
    healthy = "Healthy"
    degraded = "Degraded"
    unhealthy = "Unhealthy"


_SEVERITY = {
    HealthStatus.healthy: 0,
    HealthStatus.degraded: 1,
    HealthStatus.unhealthy: 2,
}


@dataclass(frozen=True)
class HealthCheckResult:
    status: HealthStatus
    description: str
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def healthy(cls, description: str, **data: Any) -> "HealthCheckResult":
        return cls(HealthStatus.healthy, description, data)

    @classmethod
    def degraded(cls, description: str, **data: Any) -> "HealthCheckResult":
        return cls(HealthStatus.degraded, description, data)

    @classmethod
    def unhealthy(cls, description: str, **data: Any) -> "HealthCheckResult":
        return cls(HealthStatus.unhealthy, description, data)


class BaseHealthCheck:
    name: str = "base"

    async def check(self) -> HealthCheckResult:
        started = time.perf_counter()
        try:
            result = await self.run()
        except Exception as exc:
            logger.warning("Health check %s failed: %s", self.name, exc)
            result = HealthCheckResult.unhealthy(f"{self.name} check failed: {exc}")
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        return HealthCheckResult(
            result.status,
            result.description,
            {**result.data, "durationMs": elapsed_ms},
        )

    async def run(self) -> HealthCheckResult:
        raise NotImplementedError


class DatabaseConnectionHealthCheck(BaseHealthCheck):
    name = "database"

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def run(self) -> HealthCheckResult:
        async with self.engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
        return HealthCheckResult.healthy("Database connection is available.")


class WebDependencyHealthCheck(BaseHealthCheck):
    """GET a dependency URL, retrying transient connection errors."""

    name = "web_dependency"

    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        attempts: int = 2,
        slow_threshold_ms: float = 2000.0,
        transport: httpx.AsyncBaseTransport | None = None,
        wait=None,
    ):
        self.url = url
        self.timeout = timeout
        self.attempts = max(1, attempts)
        self.slow_threshold_ms = slow_threshold_ms
        self.transport = transport
        self.wait = wait if wait is not None else wait_exponential(multiplier=0.5, max=4)

    async def _fetch(self) -> httpx.Response:
        async with httpx.AsyncClient(
            transport=self.transport, timeout=self.timeout, follow_redirects=True
        ) as client:
            return await client.get(self.url)

    async def run(self) -> HealthCheckResult:
        if not self.url:
            return HealthCheckResult.degraded("No URL configured for the web dependency check.")

        started = time.perf_counter()
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.attempts),
            wait=self.wait,
            retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                response = await self._fetch()
        response_time_ms = round((time.perf_counter() - started) * 1000, 2)

        data = {
            "url": self.url,
            "statusCode": response.status_code,
            "responseTimeMs": response_time_ms,
        }
        if response.is_success and response_time_ms > self.slow_threshold_ms:
            return HealthCheckResult.degraded(
                f"{self.url} responded slowly ({response_time_ms} ms).", **data
            )
        if response.is_success:
            return HealthCheckResult.healthy(f"{self.url} is reachable.", **data)
        return HealthCheckResult.unhealthy(
            f"{self.url} responded with status {response.status_code}.", **data
        )


@dataclass(frozen=True)
class HealthReport:
    entries: dict[str, HealthCheckResult]

    @property
    def status(self) -> HealthStatus:
        if not self.entries:
            return HealthStatus.healthy
        return max((entry.status for entry in self.entries.values()), key=_SEVERITY.__getitem__)

    @property
    def status_code(self) -> int:
        return 503 if self.status is HealthStatus.unhealthy else 200

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "results": [
                {
                    "service": name,
                    "status": entry.status.value,
                    "description": entry.description,
                    **entry.data,
                }
                for name, entry in self.entries.items()
            ],
        }


class HealthCheckService:
    def __init__(self, checks: list[BaseHealthCheck]):
        self.checks = checks

    async def run(self) -> HealthReport:
        entries = {}
        for health_check in self.checks:
            entries[health_check.name] = await health_check.check()
        return HealthReport(entries)

    @classmethod
    def from_settings(cls, settings: Settings, engine: AsyncEngine) -> "HealthCheckService":
        return cls([
            DatabaseConnectionHealthCheck(engine),
            WebDependencyHealthCheck(
                settings.health_check_url,
                timeout=settings.health_check_timeout_seconds,
                attempts=settings.health_check_retries,
                slow_threshold_ms=settings.health_check_slow_ms,
            ),
        ])
