import json
import logging

from gptchat.logging_config import (
    ColoredConsoleFormatter,
    LoggerAdapter,
    StructuredFormatter,
    get_logger,
    setup_logging,
)


def test_structured_formatter_includes_extra_data():
    record = logging.LogRecord("gptchat.test", logging.INFO, __file__, 10, "hello %s", ("world",), None)
    record.extra_data = {"model_key": "o3"}

    data = json.loads(StructuredFormatter().format(record))

    assert data["message"] == "hello world"
    assert data["level"] == "INFO"
    assert data["data"] == {"model_key": "o3"}
    assert data["timestamp"].endswith("Z")


def test_adapter_merges_extra_data():
    adapter = LoggerAdapter(get_logger("gptchat.test"), {"extra_data": {"model_key": "o3"}})

    _, kwargs = adapter.process("msg", {"extra": {"extra_data": {"messages": 2}}})
    assert kwargs["extra"]["extra_data"] == {"model_key": "o3", "messages": 2}

    _, kwargs = adapter.process("msg", {})
    assert kwargs["extra"]["extra_data"] == {"model_key": "o3"}


def test_setup_logging_writes_json_lines_to_log_dir(tmp_path):
    logger = setup_logging("DEBUG", log_to_file=True, log_to_console=False, log_dir=tmp_path / "logs")
    try:
        adapter = LoggerAdapter(get_logger("gptchat.test"), {"extra_data": {"model_key": "o3"}})
        adapter.info("relay started")
        for handler in logger.handlers:
            handler.flush()

        (log_file,) = (tmp_path / "logs").glob("gptchat_*.log")
        record = json.loads(log_file.read_text().splitlines()[-1])
        assert record["message"] == "relay started"
        assert record["logger"] == "gptchat.test"
        assert record["data"] == {"model_key": "o3"}
    finally:
        setup_logging(log_to_file=False, log_to_console=False)


def test_console_formatter_appends_extra_data_inline():
    record = logging.LogRecord("gptchat.test", logging.INFO, __file__, 10, "hello", (), None)
    record.extra_data = {"model_key": "o3"}

    line = ColoredConsoleFormatter().format(record)

    assert "\n" not in line
    assert line.endswith('{"model_key": "o3"}')
