"""Tests untuk konfigurasi logging."""

import json
import logging

from src.utils.logging import JSONFormatter, build_logging_config


def make_record(**extra):
    record = logging.LogRecord(
        name="src.services.sync", level=logging.WARNING, pathname=__file__, lineno=10,
        msg="Sync finished degraded, failed sources: %s", args=("roster",), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_context_fields():
    entry = json.loads(JSONFormatter("sikertas").format(make_record(source="roster")))
    assert entry["service"] == "sikertas"
    assert entry["level"] == "WARNING"
    assert entry["logger"] == "src.services.sync"
    assert entry["message"] == "Sync finished degraded, failed sources: roster"
    assert entry["source"] == "roster"
    assert "nip" not in entry


def test_config_without_log_file_is_console_only():
    config = build_logging_config(None)
    assert list(config["handlers"]) == ["console"]
    assert config["loggers"]["httpx"]["level"] == "WARNING"


def test_config_with_log_file(tmp_path):
    config = build_logging_config(str(tmp_path / "sikertas.log"))
    assert config["handlers"]["file"]["class"] == "logging.handlers.RotatingFileHandler"
    assert config["loggers"][""]["handlers"] == ["console", "file"]
