"""Test structured logging setup."""

import json
import logging

import pytest
import structlog

from email_address.address import EmailAddress
from email_address.core.enums import LogFormat
from email_address.observability.logger import (
    _add_correlation_id,
    get_correlation_id,
    get_logger,
    reset_correlation_id,
    set_correlation_id,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _reset():
    token = set_correlation_id("")
    yield
    reset_correlation_id(token)
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


class TestCorrelationId:
    def test_default_is_empty(self):
        assert get_correlation_id() == ""

    def test_processor_adds_id_when_set(self):
        set_correlation_id("abc-123")
        assert _add_correlation_id(None, "info", {"event": "x"}) == {
            "event": "x",
            "correlation_id": "abc-123",
        }

    def test_processor_skips_when_unset(self):
        assert _add_correlation_id(None, "info", {"event": "x"}) == {"event": "x"}


class TestSetupLogging:
    def test_sets_root_level(self):
        setup_logging(level="DEBUG", format=LogFormat.JSON)
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_warning(self):
        setup_logging(level="chatty", format="console")
        assert logging.getLogger().level == logging.WARNING

    def test_json_output(self, capsys):
        setup_logging(level="INFO", format="json")
        set_correlation_id("run-1")
        get_logger("email_address.test").info("parsed", address="a@example.com")
        line = capsys.readouterr().err.strip().splitlines()[-1]
        assert '"event": "parsed"' in line
        assert '"correlation_id": "run-1"' in line
        assert '"address": "a@example.com"' in line

    def test_bad_format_rejected(self):
        with pytest.raises(ValueError):
            setup_logging(level="INFO", format="xml")

    def test_stdlib_records_rendered_as_json(self, capsys):
        setup_logging(level="DEBUG", format="json")
        set_correlation_id("run-9")
        assert EmailAddress.parse("用户@example.com").transport is None
        lines = [
            json.loads(line)
            for line in capsys.readouterr().err.strip().splitlines()
            if "No rfc5321 representation" in line
        ]
        assert lines
        record = lines[0]
        assert record["correlation_id"] == "run-9"
        assert record["level"] == "debug"
        assert record["logger"] == "email_address.grammar.lattice"
        assert record["event"] == (
            "No rfc5321 representation for 用户@example.com: non-ASCII local part"
        )
        assert "timestamp" in record


class TestResetCorrelationId:
    def test_reset_restores_previous_value(self):
        token = set_correlation_id("outer")
        inner = set_correlation_id("inner")
        reset_correlation_id(inner)
        assert get_correlation_id() == "outer"
        reset_correlation_id(token)
        assert get_correlation_id() == ""
