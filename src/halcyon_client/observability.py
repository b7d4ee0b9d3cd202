"""Structured events emitted while following links."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

HTTP_FETCH = "http_fetch"
HAL_NAVIGATE = "hal.navigate"
HAL_RESPONSE = "hal.response"

EVENT_FIELDS = (
    "rel",
    "method",
    "endpoint",
    "status",
    "content_type",
    "duration_ms",
    "attempt",
    "error_type",
)

# Attributes LogRecord sets itself, plus the ones Formatter adds later.
RESERVED_LOG_KEYS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}

_rel_var: ContextVar[Optional[str]] = ContextVar("rel", default=None)


def current_rel() -> Optional[str]:
    return _rel_var.get()


@contextmanager
def navigating(rel: str) -> Iterator[None]:
    """Tag every event emitted inside the block with the relation being followed."""
    token = _rel_var.set(rel)
    try:
        yield
    finally:
        _rel_var.reset(token)


def log_event(
    event: str,
    *,
    level: int = logging.INFO,
    logger: logging.Logger | None = None,
    **fields: Any,
) -> None:
    """
    Emit one event record.
    - ``rel`` defaults to the relation of the active navigation
    - None values and reserved LogRecord attributes are dropped
    """
    log = logger or logging.getLogger("halcyon_client.events")
    if not log.isEnabledFor(level):
        return
    fields.setdefault("rel", _rel_var.get())
    extra = {
        k: v
        for k, v in fields.items()
        if v is not None and k not in RESERVED_LOG_KEYS
    }
    log.log(level, event, extra=extra)


__all__ = [
    "EVENT_FIELDS",
    "HAL_NAVIGATE",
    "HAL_RESPONSE",
    "HTTP_FETCH",
    "current_rel",
    "log_event",
    "navigating",
]
