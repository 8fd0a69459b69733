import contextvars
import json
import logging
import sys
import time
import uuid
from datetime import datetime, timezone

from services.config import get_config

_span_stack = contextvars.ContextVar("span_stack", default=[])
current_trace_id = contextvars.ContextVar("trace_id", default=str(uuid.uuid4()))


LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
config = get_config()


class TraceIDFilter(logging.Filter):
    """Injects trace_id into log records if available."""

    def filter(self, record):
        record.trace_id = current_trace_id.get() or "-"
        return True


def setup_logging():
    """
    Configure the application logger with a StreamHandler and a custom formatter.
    Also, adds a TraceIDFilter to inject trace_id into log records.
    """
    logger = logging.getLogger(config.title)
    logger.setLevel(config.logLevel.upper())

    # importing twice (e.g. under reload) must not double every line
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.addFilter(TraceIDFilter())

    return logger


logger = setup_logging()


def _now():
    return datetime.now(timezone.utc).isoformat()


def log_span(event: str, **fields):
    """
    Logs a structured span event.
    A span represents an operation or unit of work within a trace.
    It automatically includes the current trace ID, span path and timestamp.
    """
    payload = {
        "ts": _now(),
        "trace_id": current_trace_id.get(),
        "span": "/".join(_span_stack.get()) or None,
        "event": event,
        **fields,
    }
    logger.debug(json.dumps(payload, default=str))


class Span:
    """
    A context manager for logging spans.
    """

    def __init__(self, name):
        self.name = name

    def __enter__(self):
        self.start = time.time()
        stack = _span_stack.get()
        self._token = _span_stack.set(stack + [self.name])
        log_span(f"span_start_{self.name}", name=self.name)
        return self

    def __exit__(self, exc_type, exc_val, tb):
        duration = round((time.time() - self.start) * 1000, 2)
        fields = {"name": self.name, "duration_ms": duration}
        if exc_type is not None:
            fields["error"] = exc_type.__name__
        log_span(f"span_end_{self.name}", **fields)
        _span_stack.reset(self._token)


def log_event(event: str, level: int = logging.INFO, **data):
    """
    Logs a structured event with additional data.
    The current trace ID is automatically included.
    """
    payload = {
        "ts": _now(),
        "trace_id": current_trace_id.get(),
        "event": event,
        **data,
    }
    logger.log(level, json.dumps(payload, default=str))
