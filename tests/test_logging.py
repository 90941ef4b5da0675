"""Tests for structured logging helpers."""

import json
import logging
import sys

from utils.logging import CustomJsonFormatter, _error_log_namer


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.config",
        level=logging.ERROR,
        pathname=__file__,
        lineno=10,
        msg="Config initialization failed for %s",
        args=("fr",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_extra_fields():
    formatter = CustomJsonFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    payload = json.loads(formatter.format(make_record(lang="fr", url="cfg.fr.json")))

    assert payload["level"] == "ERROR"
    assert payload["module"] == "services.config"
    assert payload["message"] == "Config initialization failed for fr"
    assert payload["lang"] == "fr"
    assert payload["url"] == "cfg.fr.json"
    assert "source_kind" not in payload


def test_formatter_includes_exception_text():
    formatter = CustomJsonFormatter()
    try:
        raise ValueError("boom")
    except ValueError:
        record = make_record()
        record.exc_info = sys.exc_info()

    payload = json.loads(formatter.format(record))
    assert "ValueError: boom" in payload["exc_info"]


def test_error_log_namer():
    assert _error_log_namer("/var/log/errors/errors.jsonl.2026-10-19") == (
        "/var/log/errors/errors_2026-10-19.jsonl"
    )
