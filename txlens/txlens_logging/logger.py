"""
Structured logging: timestamp, level, event_type, logger name.

structlog with ISO timestamps and consistent keys so lookups can be traced
end to end (digest, method, endpoint). All modules should use get_logger()
and log a snake_case event name as the first argument.

Uses only Python stdlib logging and structlog; no txlens imports to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# JSON output by default (LOG_FORMAT=json); human-readable with LOG_FORMAT=console
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

# Keys whose values are credentials (the x-api-key header travels as api_key).
SECRET_KEYS = frozenset({"api_key", "x_api_key", "x-api-key", "headers"})


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type; keep message if present."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def _redact_secrets(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Replace credential values so an RPC key never reaches the log stream."""
    for key in SECRET_KEYS.intersection(event_dict):
        if event_dict[key]:
            event_dict[key] = "***"
    return event_dict


def configure_structlog() -> None:
    """Configure structlog once at import: JSON or console, timestamp, level, event_type."""
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
        _redact_secrets,
    ]
    if LOG_FORMAT == "json":
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    # Logs go to stderr so CLI output on stdout stays clean
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

    Log with event_type (first arg) and optional context:
        logger = get_logger(__name__)
        logger.warning("balance_lookup_failed", owner=addr, coin_type=coin, error=str(e))
    Output (JSON): {"event_type": "balance_lookup_failed", "owner": "...", "coin_type": "...",
    "error": "...", "timestamp": "...", "level": "warning", "logger": "module.name"}
    """
    return structlog.get_logger(name).bind(logger=name)



def bind_digest(digest: str) -> structlog.BoundLogger:
    """Return a logger with the transaction digest bound to all subsequent log calls."""
    return get_logger("txlens.lookup").bind(digest=digest)


@contextmanager
def lookup_context(digest: str, **extra: Any) -> Iterator[None]:
    """
    Bind digest (plus extra keys, e.g. the masked endpoint) to every log call
    made while one lookup runs, in any module and in tasks it spawns.
    """
    with structlog.contextvars.bound_contextvars(digest=digest, **extra):
        yield
