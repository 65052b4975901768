import logging
from typing import Any, Iterable, Optional, TextIO

# Extras set by the client (fs.request, fs.rate_limited), the paginator
# (fs.page, fs.page.stalled) and the choice cache (choices.loaded).
LOG_EXTRA_FIELDS = (
    "environment",
    "method",
    "url",
    "status",
    "duration_ms",
    "attempt",
    "retry_after",
    "strategy",
    "received",
    "total",
    "fields",
)

# httpx reports every request at INFO; fs.request already carries it.
_QUIET_LOGGERS = ("httpx", "httpcore")


def _logfmt_value(val: Any) -> str:
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, (int, float)):
        return str(val)
    s = str(val)
    if s and not any(c in s for c in ' ="\\\n'):
        return s
    escaped = s.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


class LogfmtFormatter(logging.Formatter):
    """One logfmt line per record: level, logger, event, then any known extras."""

    def __init__(self, fields: Iterable[str] = LOG_EXTRA_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        pairs = [("level", record.levelname.lower()), ("logger", record.name)]
        msg = record.getMessage()
        if msg:
            pairs.append(("event", msg))

        for key in self.fields:
            val = getattr(record, key, None)
            if val is not None:
                pairs.append((key, val))

        if record.exc_info and record.exc_info[0] is not None:
            pairs.append(("exc_type", record.exc_info[0].__name__))
            pairs.append(("exc", record.exc_info[1]))

        return " ".join(f"{key}={_logfmt_value(val)}" for key, val in pairs)


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Route root logging through one logfmt handler (stderr by default)."""
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]
