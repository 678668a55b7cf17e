"""
Health reporting for NewsWire services.

A service registers named checks; ``/health`` runs all of them, ``/health/ready``
only looks at the ones marked critical.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sized, Tuple

from shared.app_logging.logger import get_logger
from shared.config.settings import get_newsapi_key, get_newsdata_api_key


class HealthStatus(Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


_SEVERITY = {HealthStatus.HEALTHY: 0, HealthStatus.DEGRADED: 1, HealthStatus.UNHEALTHY: 2}

CheckOutcome = Tuple[HealthStatus, str, Optional[Dict[str, Any]]]


@dataclass
class HealthCheck:
    """Result of one named check."""

    name: str
    status: HealthStatus
    message: str
    response_time_ms: float = 0.0
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
            "response_time_ms": round(self.response_time_ms, 3),
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class HealthChecker:
    """Named checks for one service."""

    def __init__(self, service_name: str):
        self.service_name = service_name
        self.logger = get_logger(f"{service_name}.health")
        self._checks: Dict[str, Callable[[], CheckOutcome]] = {}
        self._critical: List[str] = []

    def add_check(self, name: str, check: Callable[[], CheckOutcome], critical: bool = False) -> None:
        self._checks[name] = check
        if critical:
            self._critical.append(name)

    def _run(self, name: str) -> HealthCheck:
        started = time.perf_counter()
        try:
            status, message, details = self._checks[name]()
        except Exception as e:
            self.logger.error(f"Health check {name} raised: {e}")
            status, message, details = HealthStatus.UNHEALTHY, f"Check raised: {e}", None
        elapsed_ms = (time.perf_counter() - started) * 1000
        return HealthCheck(name, status, message, elapsed_ms, details)

    def run_all_checks(self) -> Dict[str, Any]:
        results = [self._run(name) for name in self._checks]
        overall = max((r.status for r in results), key=_SEVERITY.get, default=HealthStatus.HEALTHY)
        return {
            "service": self.service_name,
            "status": overall.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": [r.to_dict() for r in results],
        }

    def liveness(self) -> Dict[str, Any]:
        return {"status": "alive", "service": self.service_name}

    def readiness(self) -> Dict[str, Any]:
        """Ready when every critical check is healthy."""
        results = {name: self._run(name).status for name in self._critical}
        ready = all(status is HealthStatus.HEALTHY for status in results.values())
        return {
            "status": "ready" if ready else "not_ready",
            "service": self.service_name,
            "critical_dependencies": {name: status.value for name, status in results.items()},
        }


def article_store_check(store: Sized) -> Callable[[], CheckOutcome]:
    def check() -> CheckOutcome:
        count = len(store)
        return HealthStatus.HEALTHY, f"Article store holds {count} articles", {"articles": count}

    return check


def provider_key_check(provider: str, get_key: Callable[[], str]) -> Callable[[], CheckOutcome]:
    """A provider without a key still answers (with nothing), so it only degrades."""

    def check() -> CheckOutcome:
        if get_key():
            return HealthStatus.HEALTHY, f"{provider} API key configured", None
        return HealthStatus.DEGRADED, f"{provider} API key missing; its requests are skipped", None

    return check


def create_articles_api_health_checker(store: Sized) -> HealthChecker:
    checker = HealthChecker("articles_api")
    checker.add_check("article_store", article_store_check(store), critical=True)
    return checker


def create_aggregator_health_checker() -> HealthChecker:
    checker = HealthChecker("aggregator")
    checker.add_check("newsdata", provider_key_check("newsdata", get_newsdata_api_key))
    checker.add_check("newsapi", provider_key_check("newsapi", get_newsapi_key))
    return checker
