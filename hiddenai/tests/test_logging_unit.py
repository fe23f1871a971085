"""Unit coverage for structured logging utilities and helpers."""

from __future__ import annotations

import json
import logging
from typing import Iterator

import pytest

from hiddenai.base.log_support import JsonFormatter
from hiddenai.base.logging import LogContext, configure_logger, get_logger, log_event


@pytest.fixture(autouse=True)
def reset_base_logger() -> Iterator[None]:
    yield
    configure_logger(level=logging.INFO)


def _lines(text: str) -> list[dict]:
    return [json.loads(ln) for ln in text.splitlines() if ln.strip()]


def test_get_logger_env_overrides_level(monkeypatch, capsys):
    monkeypatch.setenv("HIDDENAI_LOG_LEVEL", "ERROR")
    logger = get_logger(name="hiddenai.test", json_mode=True, level=logging.DEBUG)
    logger.info("hello")
    assert capsys.readouterr().err == ""  # nosec B101 - asserts are appropriate in unit tests
    logger.error("fail")
    data = json.loads(capsys.readouterr().err.strip())
    assert data["level"] == "ERROR"  # nosec B101 - asserts are appropriate in unit tests
    assert data["msg"] == "fail"  # nosec B101


def test_log_event_hoists_payload_and_drops_none(capsys):
    logger = get_logger(name="hiddenai.test.events")
    ctx = LogContext(operation="chat", model="gpt-4o", request_id="r1", extra={"file": "a.png"})
    log_event(logger, "request.start", ctx, attempt=1, error_kind=None)
    (data,) = _lines(capsys.readouterr().err)
    assert data["event"] == "request.start"  # nosec B101
    assert data["operation"] == "chat"  # nosec B101
    assert data["model"] == "gpt-4o"  # nosec B101
    assert data["request_id"] == "r1"  # nosec B101
    assert data["file"] == "a.png"  # nosec B101
    assert data["attempt"] == 1  # nosec B101
    assert "error_kind" not in data  # nosec B101
    assert "msg" not in data  # nosec B101


def test_log_event_stringifies_unserializable_values(capsys):
    logger = get_logger(name="hiddenai.test.objects")
    log_event(logger, "odd", level=logging.WARNING, value=object())
    (data,) = _lines(capsys.readouterr().err)
    assert data["level"] == "WARNING"  # nosec B101
    assert data["value"].startswith("<object object")  # nosec B101


def test_json_formatter_keeps_plain_messages() -> None:
    record = logging.LogRecord(
        name="hiddenai.test.plain",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg="plain %s",
        args=("text",),
        exc_info=None,
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "plain text"  # nosec B101
    assert payload["logger"] == "hiddenai.test.plain"  # nosec B101


def test_configure_logger_level_suppresses_info(capsys):
    logger = get_logger(name="hiddenai.test.levels")
    configure_logger(level="warning")
    logger.info("hidden")
    assert capsys.readouterr().err == ""  # nosec B101


def test_configure_logger_file_handler(tmp_path):
    path = tmp_path / "logs" / "hiddenai.log"
    base = configure_logger(file_path=str(path))
    try:
        log_event(get_logger("hiddenai.test.file"), "to.file", answer=42)
        for h in base.handlers:
            h.flush()
        (data,) = _lines(path.read_text(encoding="utf-8"))
        assert data["event"] == "to.file"  # nosec B101
        assert data["answer"] == 42  # nosec B101
    finally:
        configure_logger(file_path=None)
    assert not any(getattr(h, "baseFilename", None) for h in base.handlers)  # nosec B101
