"""Tests for logging and redaction utilities."""

import json
import logging

from facilbook.observability.correlation import reset_correlation_id, set_correlation_id
from facilbook.observability.logging import JsonFormatter, get_logger
from facilbook.observability.redaction import (
    redact_string,
    redact_value,
    safe_request_fields,
)


class TestRedaction:
    def test_redact_phone_number(self):
        result = redact_string("연락처 010-1234-5678")
        assert "1234" not in result
        assert "[REDACTED]" in result

    def test_redact_email(self):
        result = redact_string("Email: user@example.com")
        assert "user@example.com" not in result

    def test_redact_value_dict_only_keys(self):
        result = redact_value({"phone": "01012345678"})
        assert "0101" not in result
        assert "phone" in result

    def test_safe_request_fields_hides_requester(self):
        out = safe_request_fields(
            {
                "name": "홍길동",
                "phone": "010-1234-5678",
                "facility": "체육관",
                "detail": None,
                "purpose": "call 010-9999-8888",
            }
        )

        assert out["name"] == "present"
        assert out["phone"] == "present"
        assert out["facility"] == "체육관"
        assert out["detail"] == "null"
        assert "9999" not in out["purpose"]
        assert "홍길동" not in json.dumps(out, ensure_ascii=False)

    def test_safe_request_fields_absent_marker(self):
        assert safe_request_fields({"phone": ""})["phone"] == "absent"


class TestJsonFormatter:
    def _record(self, **extra):
        record = logging.LogRecord("facilbook.test", logging.INFO, __file__, 1, "hello", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self):
        out = json.loads(JsonFormatter().format(self._record()))
        assert out["level"] == "INFO"
        assert out["logger"] == "facilbook.test"
        assert out["message"] == "hello"
        assert "correlationId" not in out

    def test_correlation_and_extra_fields(self):
        token = set_correlation_id("cid-1")
        try:
            out = json.loads(
                JsonFormatter().format(self._record(extra_fields={"facility": "체육관"}))
            )
        finally:
            reset_correlation_id(token)

        assert out["correlationId"] == "cid-1"
        assert out["facility"] == "체육관"

    def test_non_ascii_kept_readable(self):
        line = JsonFormatter().format(self._record(extra_fields={"facility": "도서관"}))
        assert "도서관" in line


class TestGetLogger:
    def test_single_handler(self):
        first = get_logger("facilbook.test.single")
        second = get_logger("facilbook.test.single")
        assert first is second
        assert len(first.handlers) == 1
        assert first.propagate is False

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert get_logger("facilbook.test.level").level == logging.WARNING
