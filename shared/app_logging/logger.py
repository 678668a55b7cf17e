"""
Logging setup shared by the NewsWire services.

Every record carries the service name, the request's correlation ID and any
fields bound with ``log_context`` (HTTP method/path, upstream provider, ...).
"""

import json
import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

from shared.config.settings import get_settings

NO_CORRELATION_ID = "no-correlation-id"

# Loggers used by code in ``shared``; they report under whichever service set them up
SHARED_LOGGER = "newswire"

# httpx logs every request URL at INFO, and NewsData.io takes its key as a query param
NOISY_LOGGERS = ("httpx", "httpcore")

correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
context_fields_var: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})

_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "correlation_id",
    "service_name",
    "context",
}


class ContextFilter(logging.Filter):
    """Copy the correlation ID and bound context fields onto each record."""

    def __init__(self, service_name: str, include_correlation_id: bool = True):
        super().__init__()
        self.service_name = service_name
        self.include_correlation_id = include_correlation_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = self.service_name
        if self.include_correlation_id:
            record.correlation_id = correlation_id_var.get() or NO_CORRELATION_ID
        record.context = dict(context_fields_var.get())
        return True


def _record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    fields = dict(getattr(record, "context", {}))
    for key, value in record.__dict__.items():
        if key not in _RECORD_ATTRS:
            fields[key] = value
    return fields


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": getattr(record, "service_name", "unknown"),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if hasattr(record, "correlation_id"):
            entry["correlation_id"] = record.correlation_id
        entry.update(_record_fields(record))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class StructuredFormatter(logging.Formatter):
    """Human-readable lines: [time] [level] [service] [correlation] logger: message key=value"""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        parts = [f"[{timestamp}]", f"[{record.levelname}]", f"[{getattr(record, 'service_name', 'unknown')}]"]
        if hasattr(record, "correlation_id"):
            parts.append(f"[{record.correlation_id}]")
        line = " ".join(parts) + f" {record.name}: {record.getMessage()}"

        fields = _record_fields(record)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(
    service_name: str,
    log_level: Optional[str] = None,
    json_logs: Optional[bool] = None,
    include_correlation_id: Optional[bool] = None,
) -> logging.Logger:
    """
    Configure logging for a service and return its root logger.

    Args:
        service_name: Logger tree to configure (e.g. 'articles_api', 'aggregator')
        log_level: Overrides LOG_LEVEL
        json_logs: Overrides JSON_LOGS
        include_correlation_id: Overrides LOG_INCLUDE_CORRELATION_ID

    Returns:
        The ``service_name`` logger
    """
    settings = get_settings().logging

    level = getattr(logging, (log_level or settings.level).upper())
    use_json = settings.json_logs if json_logs is None else json_logs
    with_corr_id = settings.include_correlation_id if include_correlation_id is None else include_correlation_id

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if use_json else StructuredFormatter())
    handler.addFilter(ContextFilter(service_name, with_corr_id))

    for name in (service_name, SHARED_LOGGER):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for old in logger.handlers[:]:
            logger.removeHandler(old)
        logger.addHandler(handler)
        logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logging.getLogger(service_name)


def get_logger(name: str) -> logging.Logger:
    """Child logger, e.g. ``get_logger("aggregator.client")``."""
    return logging.getLogger(name)


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get()


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Bind extra fields to every record logged inside the block."""
    token = context_fields_var.set({**context_fields_var.get(), **fields})
    try:
        yield
    finally:
        context_fields_var.reset(token)


class CorrelationContext:
    """Context manager binding a correlation ID (a fresh one if none is given)."""

    def __init__(self, correlation_id: Optional[str] = None):
        self.correlation_id = correlation_id or generate_correlation_id()
        self._token = None

    def __enter__(self) -> str:
        self._token = correlation_id_var.set(self.correlation_id)
        return self.correlation_id

    def __exit__(self, exc_type, exc_val, exc_tb):
        correlation_id_var.reset(self._token)
