"""Tests for structured logging with trace propagation."""

from __future__ import annotations

import io
import json

import pytest
from loguru import logger

from dayprism.core.logging import LogConfig, configure_logging, log_context


def _read_records(stream: io.StringIO) -> list[dict[str, object]]:
    stream.seek(0)
    lines = [line for line in stream.getvalue().splitlines() if line.strip()]
    return [json.loads(line) for line in lines]


@pytest.fixture
def buffer() -> io.StringIO:
    stream = io.StringIO()
    yield stream
    configure_logging()


def test_structured_log_contains_trace_and_context(buffer) -> None:
    configure_logging(console_stream=buffer, console_output=True, file_output=False)

    with log_context(trace_id="trace-123", provider="alpha_vantage", error_code="TIER_DENIED", symbol="IBM"):
        logger.info("falling back", tier="free")

    records = _read_records(buffer)
    assert len(records) == 1
    record = records[0]
    assert record["level"] == "INFO"
    assert record["message"] == "falling back"
    assert record["trace_id"] == "trace-123"
    assert record["provider"] == "alpha_vantage"
    assert record["error_code"] == "TIER_DENIED"
    assert record["context"] == {"symbol": "IBM", "tier": "free"}


def test_bound_values_win_over_context(buffer) -> None:
    configure_logging(console_stream=buffer)

    with log_context(trace_id="t-1", provider="from-context"):
        logger.bind(provider="bound", symbol="IBM").info("event")

    (record,) = _read_records(buffer)
    assert record["provider"] == "bound"
    assert record["context"] == {"symbol": "IBM"}


def test_trace_id_propagates_within_context(buffer) -> None:
    configure_logging(console_stream=buffer)

    with log_context() as trace_id:
        logger.info("first event")
        logger.info("second event")

    logger.info("outside context")

    records = _read_records(buffer)
    assert len(records) == 3
    assert records[0]["trace_id"] == records[1]["trace_id"] == trace_id
    assert records[2]["trace_id"] != trace_id


def test_trace_id_generated_when_missing(buffer) -> None:
    configure_logging(console_stream=buffer)

    logger.info("single message")

    (record,) = _read_records(buffer)
    trace_id = record["trace_id"]
    assert isinstance(trace_id, str)
    assert len(trace_id) == 32
    assert all(character in "0123456789abcdef" for character in trace_id)
    assert record["provider"] is None
    assert record["error_code"] is None


def test_level_filters_records(buffer) -> None:
    configure_logging(level="WARNING", console_stream=buffer)

    logger.info("dropped")
    logger.warning("kept")

    assert [r["message"] for r in _read_records(buffer)] == ["kept"]


def test_reconfigure_updates_level(buffer) -> None:
    configure_logging(level="ERROR", console_stream=buffer)
    logger.warning("dropped")

    configure_logging(level="DEBUG", console_stream=buffer)
    logger.debug("kept")

    assert [r["message"] for r in _read_records(buffer)] == ["kept"]


def test_file_sink_writes_json_lines(tmp_path) -> None:
    path = tmp_path / "logs" / "dayprism.jsonl"
    configure_logging(console_output=False, file_output=True, file_path=str(path))

    try:
        logger.error("upstream failed")
    finally:
        configure_logging()

    (line,) = path.read_text(encoding="utf-8").splitlines()
    assert json.loads(line)["message"] == "upstream failed"


def test_log_config_defaults() -> None:
    config = LogConfig()

    assert config.level == "INFO"
    assert config.console_output is True
    assert config.file_output is False
    assert config.extra == {}
