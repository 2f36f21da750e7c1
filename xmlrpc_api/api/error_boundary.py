"""Fault-mapping helpers for the dispatcher error boundary."""

from __future__ import annotations

import re
from typing import Callable

from xmlrpc_api.protocol.fault import Fault
from xmlrpc_api.utils.exceptions import (
    FAULT_CODE_UNKNOWN_METHOD,
    FAULT_CODE_VALUE_ERROR,
    XmlRpcValueError,
    fault_code_for_exception,
    format_exception_text,
)

UNKNOWN_METHOD_MESSAGE = "Unknown method"

# Characters XML 1.0 cannot carry.
_XML_UNSAFE_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def xml_safe_text(text: str) -> str:
    return _XML_UNSAFE_RE.sub("?", text)


def unknown_method_fault(
    *,
    method: str | None,
    log_info: Callable[..., None],
) -> Fault:
    """Build the standard unknown-method fault."""
    log_info("XML-RPC unknown method {!r}", method)
    return Fault(FAULT_CODE_UNKNOWN_METHOD, UNKNOWN_METHOD_MESSAGE)


def declared_fault(
    *,
    method: str | None,
    exc: Fault,
    log_warning: Callable[..., None],
) -> Fault:
    """Pass a fault raised by a handler through unchanged."""
    log_warning("XML-RPC method {} raised fault {}: {}", method, exc.fault_code, exc.fault_string)
    return exc


def value_error_fault(
    *,
    method: str | None,
    exc: XmlRpcValueError,
    log_warning: Callable[..., None],
) -> Fault:
    """Map value parsing failures to fault code -1."""
    log_warning("XML-RPC method {} failed to parse values: {}", method, exc)
    return Fault(FAULT_CODE_VALUE_ERROR, xml_safe_text(str(exc)))


def unhandled_exception_fault(
    *,
    method: str | None,
    exc: BaseException,
    log_exception: Callable[..., None],
    include_traceback: bool = False,
    redact: bool = False,
) -> Fault:
    """Map unexpected exceptions to the catch-all fault code 0 (or their own ``fault_code``)."""
    log_exception("XML-RPC method {} failed with {}: {}", method, type(exc).__name__, exc)
    text = format_exception_text(exc, include_traceback=include_traceback, redact=redact)
    return Fault(fault_code_for_exception(exc), xml_safe_text(text))


def fault_for_exception(
    *,
    method: str | None,
    exc: BaseException,
    log_info: Callable[..., None],
    log_warning: Callable[..., None],
    log_exception: Callable[..., None],
    include_traceback: bool = False,
    redact: bool = False,
) -> Fault:
    """Classify a handler failure: declared fault, value error, or anything else."""
    if isinstance(exc, Fault):
        return declared_fault(method=method, exc=exc, log_warning=log_warning)
    if isinstance(exc, XmlRpcValueError):
        return value_error_fault(method=method, exc=exc, log_warning=log_warning)
    return unhandled_exception_fault(
        method=method,
        exc=exc,
        log_exception=log_exception,
        include_traceback=include_traceback,
        redact=redact,
    )


def classify_http_status(payload_kind: str) -> int:
    """HTTP status for an inbound payload classification."""
    status_by_kind: dict[str, int] = {
        "methodCall": 200,
        "xml": 400,
        "invalid": 400,
    }
    return status_by_kind.get(payload_kind, 400)
