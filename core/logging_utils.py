"""
Utilities for safe logging of wage calculations
"""

import hashlib
import re
from typing import Any, Dict, Optional, Union


def hash_driver_id(driver_id: Union[int, str, None], salt: str = "fleetpay_drv") -> str:
    """
    Creates hash from driver ID for safe logging

    Args:
        driver_id: Driver ID
        salt: Salt for hashing

    Returns:
        Hashed ID (first 8 characters), e.g. drv_1a2b3c4d
    """
    if driver_id is None or driver_id == "":
        return "[no_driver]"

    hash_obj = hashlib.sha256(f"{salt}:{driver_id}".encode())
    return f"drv_{hash_obj.hexdigest()[:8]}"


def err_tag(exc: BaseException) -> str:
    """
    Extract safe error tag from exception for logging

    Args:
        exc: Exception instance

    Returns:
        Safe error tag with sanitized message content
    """
    for attr in ("safe_message", "public_message"):
        msg = getattr(exc, attr, None)
        if msg:
            return str(msg)[:120]

    text = str(exc)

    # Strip emails and long tokens
    text = re.sub(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}", "***@***", text)
    text = re.sub(r"\b(?:Bearer\s+)?[A-Za-z0-9._-]{24,}\b", "****", text)

    return text[:120] if text.strip() else exc.__class__.__name__


def shift_log_extra(
    shift_id: Optional[int],
    company_id: Optional[int] = None,
    driver_id: Optional[int] = None,
    **kwargs: Any,
) -> Dict[str, Any]:
    """
    Build the ``extra`` dict attached to wage calculation log records.

    The driver reference is hashed; shift and company ids are kept as-is.
    """
    extra = {"shift_id": shift_id}
    if company_id is not None:
        extra["company_id"] = company_id
    if driver_id is not None:
        extra["driver_hash"] = hash_driver_id(driver_id)
    extra.update(kwargs)
    return extra
