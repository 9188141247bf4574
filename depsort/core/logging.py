"""Logging setup for depsort runs: plain or JSON lines on stderr, tagged with a run id."""
import json
import logging
import uuid
import functools
import time
from datetime import datetime, timezone
from typing import Optional, TextIO

# Resolution details passed through ``extra=`` and copied into JSON output.
EXTRA_FIELDS = ("node", "roots", "cycle")

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] [%(run_id)s] %(message)s"

_RUN_ID: Optional[str] = None


def get_run_id() -> str:
    """Short id shared by every record of this process."""
    global _RUN_ID
    if _RUN_ID is None:
        _RUN_ID = uuid.uuid4().hex[:8]
    return _RUN_ID


class RunIdFilter(logging.Filter):
    """Stamps ``run_id`` on each record passing through the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = get_run_id()
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with any resolution extras attached."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "run_id": getattr(record, "run_id", get_run_id()),
            "message": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key)) for key in EXTRA_FIELDS if hasattr(record, key)
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(verbosity: int = 0, json_format: bool = False,
                  stream: Optional[TextIO] = None) -> logging.Handler:
    """Route the root logger to a single stderr handler.

    Args:
        verbosity: 0=WARNING, 1=INFO, 2 or more=DEBUG
        json_format: Emit JSON lines instead of plain text
        stream: Where to write; defaults to sys.stderr

    Returns:
        The installed handler.
    """
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    handler = logging.StreamHandler(stream)
    handler.addFilter(RunIdFilter())
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    return handler


def timed(func):
    """Log how long each call of ``func`` took, at INFO."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            logging.info(f"{func.__name__} took {time.perf_counter() - start:.3f}s")
    return wrapper
