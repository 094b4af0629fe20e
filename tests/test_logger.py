"""
Tests for the structured logging helpers.
"""
import pytest
import structlog
from structlog.testing import capture_logs

from amazon_scraper.utils.logger import LayerLogger, set_trace_id


@pytest.fixture(autouse=True)
def clean_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


class TestTraceId:

    def test_generated_when_missing(self):
        trace_id = set_trace_id()

        assert len(trace_id) == 8
        assert structlog.contextvars.get_contextvars()["trace_id"] == trace_id

    def test_explicit_value_kept(self):
        assert set_trace_id("abc123") == "abc123"
        assert structlog.contextvars.get_contextvars()["trace_id"] == "abc123"


class TestLayerLogger:

    def test_events_carry_layer_name(self):
        with capture_logs() as logs:
            LayerLogger("selector_engine").log_fallback(
                from_source="rules", to_source="offscreen_currency_price", reason="no rule matched"
            )

        assert len(logs) == 1
        entry = logs[0]
        assert entry["event"] == "fallback_triggered"
        assert entry["layer"] == "selector_engine"
        assert entry["to_source"] == "offscreen_currency_price"
        assert entry["log_level"] == "warning"

    def test_fetch_event(self):
        with capture_logs() as logs:
            LayerLogger("document_source").log_http_fetch("https://www.amazon.com/dp/X", 503, "failed")

        assert logs[0]["event"] == "http_fetch"
        assert logs[0]["status_code"] == 503
        assert logs[0]["result"] == "failed"
