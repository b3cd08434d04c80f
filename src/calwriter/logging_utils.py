"""
Structured logging setup with optional JSON output and redaction.
- Console handler (stderr, so calendars written to stdout stay clean) + optional rotating file handler
- Pretty text by default; JSON if CALWRITER_LOG_JSON=true
- Redacts emails and bearer-like tokens if enabled in settings (event text often carries addresses)
- Handlers live on the `calwriter` logger; the root logger is left to the host application
- Nothing is attached until the host calls `configure_logging()`; until then a NullHandler keeps the library quiet

Example:
    from calwriter.logging_utils import configure_logging, get_logger
    configure_logging()
    log = get_logger(__name__)
    log.info("calendar written", extra={"components": 3})
"""
from __future__ import annotations

import json
import logging
import logging.handlers as handlers
import re
import sys
from datetime import datetime, timezone
from typing import Any

from calwriter.config import APP_NAME, get_settings


EMAIL_RE = re.compile(r"(?i)([a-z0-9._%+-]+)@([a-z0-9.-]+\.[a-z]{2,})")
TOKEN_RE = re.compile(r"(?i)\b(eyJ[\w-]+\.[\w-]+\.[\w-]+|sk-[A-Za-z0-9]{20,}|ya29\.[A-Za-z0-9_-]{20,})\b")

_STD_ATTRS = set(vars(logging.LogRecord("x", 0, "x", 0, "", (), None)).keys())


def _redact(s: str) -> str:
    return TOKEN_RE.sub("***TOKEN***", EMAIL_RE.sub("***@***", s))


class RedactingFilter(logging.Filter):
    """Redact emails and token-like strings in log messages and extras."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        """Mutate the record in-place, replacing sensitive string patterns."""
        if not get_settings().redact_emails_in_logs:
            return True
        if isinstance(record.msg, str):
            record.msg = _redact(record.msg)
        if record.args and isinstance(record.args, tuple):
            record.args = tuple(_redact(a) if isinstance(a, str) else a for a in record.args)
        # extras end up as plain record attributes
        for k, v in list(record.__dict__.items()):
            if k not in _STD_ATTRS and isinstance(v, str):
                setattr(record, k, _redact(v))
        return True


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter for logs."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        """Render a log record as a JSON object string."""
        base: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _STD_ATTRS}
        if extras:
            base.update({k: _safe(v) for k, v in extras.items()})
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable single-line formatter for console output."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        """Render timestamp, level, logger name, message and extras as plain text."""
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        msg = record.getMessage()
        extras = " ".join(f"{k}={v}" for k, v in record.__dict__.items() if k not in _STD_ATTRS)
        line = f"{ts} | {record.levelname:<7} | {record.name} | {msg}"
        return f"{line} | {extras}" if extras else line


def _safe(v: Any) -> Any:
    try:
        json.dumps(v)
        return v
    except (TypeError, ValueError):
        return repr(v)


_configured = False

logging.getLogger(APP_NAME).addHandler(logging.NullHandler())


def configure_logging(force: bool = False) -> None:
    """Set up console + optional rotating file handlers on the `calwriter` logger.

    Called by the host application. Safe to call multiple times with force=True.
    """
    global _configured
    if _configured and not force:
        return

    settings = get_settings()
    pkg = logging.getLogger(APP_NAME)
    for h in list(pkg.handlers):
        pkg.removeHandler(h)
        h.close()

    level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    pkg.setLevel(level)

    filt = RedactingFilter()

    # Console handler
    ch = logging.StreamHandler(sys.stderr)
    ch.addFilter(filt)
    ch.setLevel(level)
    ch.setFormatter(JsonFormatter() if settings.log_json else TextFormatter())
    pkg.addHandler(ch)

    # File handler (rotating)
    if settings.log_path is not None:
        try:
            settings.ensure_dirs()
            fh = handlers.RotatingFileHandler(
                settings.log_path, maxBytes=settings.log_max_bytes, backupCount=settings.log_backup_count
            )
            fh.addFilter(filt)
            fh.setLevel(level)
            fh.setFormatter(JsonFormatter())  # Always JSON in file for easier parsing
            pkg.addHandler(fh)
        except OSError:
            # If filesystem not writable, keep going with console only
            pkg.warning("file handler disabled (log_path not writable)")

    _configured = True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the `calwriter` namespace; does not attach handlers."""
    return logging.getLogger(name if name else APP_NAME)
