# core/tests/test_logging_filters.py
import logging
from io import StringIO

from fleetpay.logging_filters import PIIRedactorFilter


def make_logger(name):
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setLevel(logging.INFO)
    handler.addFilter(PIIRedactorFilter())
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.handlers = []  # isolate from global handlers
    logger.propagate = False
    logger.addHandler(handler)
    return logger, handler, stream


def test_email_and_token_are_redacted_stream():
    logger, _, stream = make_logger("test.pii")

    logger.info(
        "email=%s token=%s", "john.doe@example.com", "Bearer eyJhbGciOiVeryLongToken..."
    )

    value = stream.getvalue()
    assert "***@example.com" in value
    assert "****" in value
    assert "john.doe@example.com" not in value


def test_ni_number_is_redacted():
    logger, _, stream = make_logger("test.pii.ni")

    logger.info("Driver NI number QQ123456C on file")

    assert "QQ123456C" not in stream.getvalue()


def test_sensitive_extra_keys_are_redacted():
    logger, handler, _ = make_logger("test.pii.extra")
    records = []
    handler.emit = records.append

    logger.info(
        "Payslip issued",
        extra={"bank_account": "12345678", "shift_id": 42, "payload": {"sort_code": "12-34-56"}},
    )

    record = records[0]
    assert record.bank_account == "****"
    assert record.shift_id == 42
    assert record.payload == {"sort_code": "****"}
