import io
import logging
import sys

import respx
from httpx import Response
from freshservice_toolkit.core.client import FreshserviceClient
from freshservice_toolkit.core.config import Environment, EnvironmentBinding
from freshservice_toolkit.core.logging import LogfmtFormatter, setup_logging

LIVE = "https://live.freshservice.test/api/v2"


def _client() -> FreshserviceClient:
    return FreshserviceClient(
        environments={
            Environment.LIVE: EnvironmentBinding(
                host="live.freshservice.test", api_key="super-secret"
            )
        },
        sleep=lambda _: None,
    )


@respx.mock
def test_request_is_traced_without_credentials(caplog):
    respx.get(f"{LIVE}/tickets").mock(
        return_value=Response(200, json={"tickets": []})
    )

    with caplog.at_level(logging.DEBUG, logger="freshservice_toolkit.client"):
        with _client() as cl:
            list(cl.get("tickets", "tickets"))

    record = next(r for r in caplog.records if r.getMessage() == "fs.request")
    assert record.method == "GET"
    assert record.status == 200
    assert record.environment == "live"
    assert record.url == f"{LIVE}/tickets"
    assert record.duration_ms >= 0
    assert "super-secret" not in caplog.text


@respx.mock
def test_rate_limit_is_logged(caplog):
    respx.get(f"{LIVE}/tickets").mock(
        side_effect=[
            Response(429, headers={"Retry-After": "1"}),
            Response(200, json={"tickets": []}),
        ]
    )

    with caplog.at_level(logging.WARNING, logger="freshservice_toolkit.client"):
        with _client() as cl:
            list(cl.get("tickets", "tickets"))

    record = next(r for r in caplog.records if r.getMessage() == "fs.rate_limited")
    assert record.retry_after == 1


def test_logfmt_formatter_includes_extras():
    record = logging.LogRecord(
        "freshservice_toolkit.client", logging.INFO, __file__, 1, "fs.request", None, None
    )
    record.method = "GET"
    record.url = "https://x.test/api/v2/tickets?query=a b"
    record.status = 200

    line = LogfmtFormatter().format(record)

    assert line.startswith("level=info logger=freshservice_toolkit.client event=fs.request")
    assert "method=GET" in line
    assert 'url="https://x.test/api/v2/tickets?query=a b"' in line
    assert "status=200" in line


def test_logfmt_formatter_escapes_and_reports_exceptions():
    try:
        raise ValueError('bad "value"')
    except ValueError:
        record = logging.LogRecord(
            "freshservice_toolkit.client",
            logging.ERROR,
            __file__,
            1,
            "fs.request",
            None,
            sys.exc_info(),
        )
    record.environment = "sandbox"
    record.attempt = 1
    record.fields = 0

    line = LogfmtFormatter().format(record)

    assert "environment=sandbox" in line
    assert "attempt=1" in line
    assert "fields=0" in line
    assert "exc_type=ValueError" in line
    assert 'exc="bad \\"value\\""' in line


def test_logfmt_formatter_custom_fields():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "evt", None, None)
    record.method = "GET"
    record.status = 200

    line = LogfmtFormatter(fields=("status",)).format(record)

    assert line == "level=info logger=x event=evt status=200"


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    httpx_level = logging.getLogger("httpx").level
    stream = io.StringIO()
    try:
        setup_logging("debug", stream=stream)
        setup_logging("debug", stream=stream)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, LogfmtFormatter)
        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

        logging.getLogger("freshservice_toolkit.test").info("hello")
        assert "event=hello" in stream.getvalue()
    finally:
        logging.getLogger("httpx").setLevel(httpx_level)
        for h in list(root.handlers):
            root.removeHandler(h)
        for h in saved[0]:
            root.addHandler(h)
        root.setLevel(saved[1])
