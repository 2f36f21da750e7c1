"""XML-RPC value codec."""

from xmlrpc_api.codec.dates import format_iso8601, parse_iso8601
from xmlrpc_api.codec.document import as_document, parse_document, serialize
from xmlrpc_api.codec.values import Base64, Value, build_value, parse_value, render_value

__all__ = [
    "Base64",
    "Value",
    "as_document",
    "build_value",
    "format_iso8601",
    "parse_document",
    "parse_iso8601",
    "parse_value",
    "render_value",
    "serialize",
]
