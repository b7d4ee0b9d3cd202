"""logfmt rendering for the events in ``halcyon_client.observability``."""

import logging
from typing import IO, Any, Optional, Sequence

from .observability import EVENT_FIELDS

PACKAGE_LOGGER = "halcyon_client"
_HANDLER_MARK = "_halcyon_logfmt"


def _quote(val: Any) -> str:
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, (int, float)):
        return str(val)
    s = str(val)
    if not s or any(c in s for c in ' ="'):
        s = '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return s


class LogfmtFormatter(logging.Formatter):
    """Renders level, logger and event, then whichever event fields are set."""

    def __init__(self, fields: Sequence[str] = EVENT_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        pairs = [
            ("level", record.levelname.lower()),
            ("logger", record.name),
            ("event", record.getMessage()),
        ]
        for key in self.fields:
            val = getattr(record, key, None)
            if val is not None:
                pairs.append((key, val))
        if record.exc_info and record.exc_info[0] is not None:
            pairs.append(("exc_type", record.exc_info[0].__name__))
        return " ".join(f"{key}={_quote(val)}" for key, val in pairs)


def setup_logging(level: str = "INFO", stream: Optional[IO[str]] = None) -> logging.Handler:
    """
    Write ``halcyon_client`` records to ``stream`` (stderr by default) as logfmt.
    A repeated call replaces the handler installed by the previous one.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for h in list(logger.handlers):
        if getattr(h, _HANDLER_MARK, False):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream)
    setattr(handler, _HANDLER_MARK, True)
    handler.setFormatter(LogfmtFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


__all__ = ["LogfmtFormatter", "PACKAGE_LOGGER", "setup_logging"]
