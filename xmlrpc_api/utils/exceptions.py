"""
Exception hierarchy and error handling utilities for xmlrpc_api.

Provides:
- Base exception class with error codes
- Value and request error types raised by the codec and message layers
- Fault code classification for dispatcher error boundaries
- Safe error message formatting (no sensitive data leak)
"""

from __future__ import annotations

import re
import traceback
from typing import Any

# Fault codes reserved by the dispatcher.
FAULT_CODE_INTERNAL = 0
FAULT_CODE_VALUE_ERROR = -1
FAULT_CODE_UNKNOWN_METHOD = -2


class XmlRpcError(Exception):
    """Base exception for all xmlrpc_api errors."""

    def __init__(
        self,
        message: str,
        code: str | int = "XMLRPC_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


class XmlRpcValueError(XmlRpcError, ValueError):
    """Malformed or unrecognized XML-RPC value content."""

    def __init__(self, message: str, tag: str | None = None):
        details = {"tag": tag} if tag else {}
        super().__init__(message, code="VALUE_ERROR", details=details)


class RequestError(XmlRpcError):
    """Invalid message construction options or a failed HTTP exchange.

    XML-RPC faults returned by a remote peer are not request errors; check
    ``Response.error()`` for those.
    """

    def __init__(self, message: str, status_code: int | None = None):
        details = {"status_code": status_code} if status_code is not None else {}
        super().__init__(message, code="REQUEST_ERROR", details=details)
        self.status_code = status_code


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"sk-[a-zA-Z0-9]{20,}"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove sensitive information from error messages."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def fault_code_for_exception(exc: BaseException) -> int:
    """
    Classify an exception into an XML-RPC fault code.

    Faults keep their own code, value errors map to -1, and everything else
    falls into the catch-all code 0.
    """
    fault_code = getattr(exc, "fault_code", None)
    if isinstance(fault_code, int) and not isinstance(fault_code, bool):
        return fault_code
    if isinstance(exc, XmlRpcValueError):
        return FAULT_CODE_VALUE_ERROR
    return FAULT_CODE_INTERNAL


def format_exception_text(
    exc: BaseException,
    *,
    include_traceback: bool = False,
    redact: bool = False,
) -> str:
    """Format an exception as fault string text, optionally with its traceback."""
    text = str(exc)
    if include_traceback:
        trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        text = f"{text}\n{trace.rstrip()}"
    if redact:
        text = sanitize_error_message(text)
    return text
