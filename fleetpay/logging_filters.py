# fleetpay/logging_filters.py
import logging
import re
from typing import Any, Mapping

REDACTION = "****"
SENSITIVE_KEYS = {
    "password", "token", "authorization", "secret",
    "email", "phone",
    "national_insurance", "ni_number", "bank_account", "sort_code", "iban",
}

# Attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_email_re = re.compile(r"([A-Za-z0-9._%+-]+)@([A-Za-z0-9.-]+\.[A-Za-z]{2,})")
_token_like_re = re.compile(r"(?:Bearer\s+)?[A-Za-z0-9\-_]{24,}")
_ni_number_re = re.compile(r"\b[A-CEGHJ-PR-TW-Z]{2}\d{6}[A-D]\b", re.IGNORECASE)


def _redact_scalar(value: Any) -> Any:
    if value is None or isinstance(value, (int, float, bool)):
        return value
    s = str(value)
    s = _email_re.sub(r"***@\2", s)
    s = _ni_number_re.sub(REDACTION, s)
    s = _token_like_re.sub(REDACTION, s)
    return s


def _redact(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            k: (REDACTION if isinstance(k, str) and k.lower() in SENSITIVE_KEYS else _redact(v))
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple, set)):
        return type(value)(_redact(v) for v in value)
    return _redact_scalar(value)


class PIIRedactorFilter(logging.Filter):
    """Redact emails, NI numbers, tokens and sensitive keys in log records.

    Covers the format string, positional/named args and any attribute
    attached through ``extra=``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            if isinstance(record.msg, str):
                record.msg = _redact_scalar(record.msg)

            args = getattr(record, "args", None)
            if args:
                if isinstance(args, Mapping):
                    record.args = _redact(args)
                elif isinstance(args, (tuple, list)):
                    record.args = tuple(_redact(a) for a in args)
                else:
                    record.args = _redact(args)

            for key in list(vars(record)):
                if key in _RESERVED_ATTRS:
                    continue
                if key.lower() in SENSITIVE_KEYS:
                    setattr(record, key, REDACTION)
                else:
                    setattr(record, key, _redact(getattr(record, key)))
        except Exception:
            # never break logging
            pass
        return True
