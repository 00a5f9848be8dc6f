"""
Test suite for logging helpers and correlation middleware.

System role: Verification of observability wiring
"""

import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient

from newsbot.observability import configure_logging, get_correlation_id, set_correlation_id
from newsbot.observability.correlation import clear_correlation_id
from newsbot.observability.log_utils import log_exception_with_context, safe_log_value
from newsbot.observability.logger import CorrelationIdFilter
from newsbot.observability.middleware import CORRELATION_HEADER, CorrelationMiddleware, RequestLoggingMiddleware


class TestSafeLogValue:
    def test_truncates_long_strings(self):
        rendered = safe_log_value("x" * 300, max_length=10)

        assert rendered.startswith("x" * 10 + "...")
        assert "300 total" in rendered

    def test_summarises_collections(self):
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"
        assert safe_log_value(None) == "None"


class TestCorrelation:
    def test_set_generates_id(self):
        value = set_correlation_id()

        assert get_correlation_id() == value
        clear_correlation_id()
        assert get_correlation_id() == ""

    def test_filter_tags_records(self):
        set_correlation_id("abc-123")
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "abc-123"
        clear_correlation_id()

    def test_exception_context_includes_request_id(self, caplog):
        set_correlation_id("req-1")
        logger = logging.getLogger("newsbot.test")

        with caplog.at_level(logging.ERROR, logger="newsbot.test"):
            log_exception_with_context(logger, "failed", ValueError("bad"), session_id="s1")

        record = caplog.records[-1]
        assert record.request_id == "req-1"
        assert record.error_type == "ValueError"
        assert record.session_id == "s1"
        clear_correlation_id()


class TestMiddleware:
    def _client(self) -> TestClient:
        app = FastAPI()
        app.add_middleware(CorrelationMiddleware)
        app.add_middleware(RequestLoggingMiddleware)

        @app.get("/ping")
        async def ping() -> dict:
            return {"correlationId": get_correlation_id()}

        return TestClient(app)

    def test_echoes_incoming_header(self):
        response = self._client().get("/ping", headers={CORRELATION_HEADER: "given-id"})

        assert response.headers[CORRELATION_HEADER] == "given-id"
        assert response.json() == {"correlationId": "given-id"}

    def test_generates_header_when_missing(self):
        response = self._client().get("/ping")

        assert response.headers[CORRELATION_HEADER]


def test_configure_logging_installs_single_handler():
    configure_logging("DEBUG")
    configure_logging("INFO")

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING
