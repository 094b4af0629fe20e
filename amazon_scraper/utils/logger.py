"""
Structured logging for the Amazon product scraper.

Every entry carries the component name and, once ``set_trace_id`` has run,
the trace ID of the request or CLI run it belongs to. Logs go to stderr:
stdout is reserved for the CLI's JSON output.
"""
import sys
import uuid
import logging
import structlog
from typing import List, Optional

from amazon_scraper.config import config


def set_trace_id(trace_id: Optional[str] = None) -> str:
    """Bind a trace ID to every log entry emitted in the current context."""
    trace_id = trace_id or uuid.uuid4().hex[:8]
    structlog.contextvars.bind_contextvars(trace_id=trace_id)
    return trace_id


def configure_logging(log_format: Optional[str] = None, log_level: Optional[str] = None):
    log_format = log_format or config.LOG_FORMAT
    level = getattr(logging, (log_level or config.LOG_LEVEL).upper())

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


class LayerLogger:
    """
    Component logger with a fixed vocabulary of events.

    Selector fallbacks, fetch outcomes and extraction summaries are logged
    through here so their field names match across components.
    """

    def __init__(self, layer_name: str):
        self.layer_name = layer_name
        self.logger = get_logger(layer_name).bind(layer=layer_name)

    def log_decision(self, decision: str, reason: str, url: Optional[str] = None, **extra):
        self.logger.info("decision_made", decision=decision, reason=reason, url=url, **extra)

    def log_action(self, action: str, status: str = "started", **extra):
        self.logger.info(f"action_{status}", action=action, **extra)

    def log_fallback(self, from_source: str, to_source: str, reason: str, **extra):
        """Log a move from one selector or source to the next one."""
        self.logger.warning(
            "fallback_triggered",
            from_source=from_source,
            to_source=to_source,
            reason=reason,
            **extra
        )

    def log_error(self, error: str, error_type: str = "unknown", **extra):
        self.logger.error("error_occurred", error=error, error_type=error_type, **extra)

    def log_http_fetch(self, url: str, status_code: Optional[int], result: str, **extra):
        """Log the outcome of one page fetch; ``status_code`` is None on transport errors."""
        self.logger.info("http_fetch", url=url, status_code=status_code, result=result, **extra)

    def log_extraction(self, source: str, fields_present: List[str], fields_missing: List[str], **extra):
        self.logger.info(
            "fields_extracted",
            source=source,
            fields_present=fields_present,
            fields_missing=fields_missing,
            **extra
        )


configure_logging()
