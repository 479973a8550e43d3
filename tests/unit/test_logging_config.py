"""Unit tests for structured logging."""

from __future__ import annotations

import json
import logging

import httpx
import pytest

from resource_client import ClientSettings, JsonFormatter, configure_logging


def _make_record(message: str, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="resource_client.client",
        level=logging.DEBUG,
        pathname="client.py",
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_required_fields(self) -> None:
        entry = json.loads(JsonFormatter().format(_make_record("hello")))

        assert entry["level"] == "DEBUG"
        assert entry["logger"] == "resource_client.client"
        assert entry["message"] == "hello"
        assert "timestamp" in entry

    def test_request_fields(self) -> None:
        record = _make_record(
            "Received 200",
            method="GET",
            url="https://api.x.com/v1/widgets/1",
            status_code=200,
            duration_ms=12.5,
            outcome="success_with_body",
        )

        entry = json.loads(JsonFormatter().format(record))

        assert entry["method"] == "GET"
        assert entry["url"] == "https://api.x.com/v1/widgets/1"
        assert entry["status_code"] == 200
        assert entry["duration_ms"] == 12.5
        assert entry["outcome"] == "success_with_body"

    def test_redacts_credentials(self) -> None:
        record = _make_record(
            "Authorization: Bearer abc123",
            url="https://api.x.com/v1/widgets?token=abc123",
        )

        output = JsonFormatter().format(record)

        assert "abc123" not in output
        assert "[REDACTED]" in output


class TestConfigureLogging:
    def test_installs_single_json_handler(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging("debug")
            configure_logging("debug")

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JsonFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_configured_from_settings_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RESOURCE_CLIENT_LOG_LEVEL", "WARNING")
        settings = ClientSettings()
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(settings.log_level)

            assert root.level == logging.WARNING
            assert isinstance(root.handlers[0].formatter, JsonFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


@pytest.mark.asyncio
async def test_client_logs_request_and_response(make_client, caplog: pytest.LogCaptureFixture) -> None:
    client = make_client(lambda r: httpx.Response(200, content=b'{"id":"1","color":"Red"}'))

    with caplog.at_level(logging.DEBUG, logger="resource_client.client"):
        await client.get("1")

    received = [r for r in caplog.records if getattr(r, "status_code", None) == 200]
    assert len(received) == 1
    assert received[0].method == "GET"
    assert received[0].outcome == "success_with_body"
