"""Utility functions for xmlrpc_api."""

from xmlrpc_api.utils.exceptions import (
    FAULT_CODE_INTERNAL,
    FAULT_CODE_UNKNOWN_METHOD,
    FAULT_CODE_VALUE_ERROR,
    RequestError,
    XmlRpcError,
    XmlRpcValueError,
    fault_code_for_exception,
    format_exception_text,
    sanitize_error_message,
)

__all__ = [
    "FAULT_CODE_INTERNAL",
    "FAULT_CODE_UNKNOWN_METHOD",
    "FAULT_CODE_VALUE_ERROR",
    "RequestError",
    "XmlRpcError",
    "XmlRpcValueError",
    "fault_code_for_exception",
    "format_exception_text",
    "sanitize_error_message",
]
