"""Tests for the structlog-backed logging setup."""

from __future__ import annotations

import json
import logging

from quiz_engine.utils import configure_logging


def test_json_records_go_to_stderr(capsys):
    configure_logging("INFO", json_output=True)
    logging.getLogger("quiz_engine.test").info("Recorded outcome: %s", "demo")
    captured = capsys.readouterr()
    assert captured.out == ""
    payload = json.loads(captured.err.strip().splitlines()[-1])
    assert payload["event"] == "Recorded outcome: demo"
    assert payload["level"] == "info"
    assert payload["logger"] == "quiz_engine.test"


def test_reconfiguring_keeps_a_single_handler():
    configure_logging("WARNING")
    configure_logging("WARNING")
    names = [h.get_name() for h in logging.getLogger().handlers]
    assert names.count("quiz_engine") == 1
    assert logging.getLogger().level == logging.WARNING
