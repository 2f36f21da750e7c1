"""Conversion between Python values and XML-RPC ``<value>`` elements.

Each XML-RPC type maps onto one Python type:

    Nil      None (never emitted)
    string   str
    int/i4   int
    boolean  bool
    double   float
    dateTime datetime (full timestamp) / date (date-only)
    base64   Base64
    array    list (tuple accepted on build)
    struct   dict (any Mapping accepted on build)
"""

from __future__ import annotations

import base64
import binascii
import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Union

from lxml import etree

from xmlrpc_api.codec.dates import format_iso8601, parse_iso8601
from xmlrpc_api.utils.exceptions import XmlRpcValueError

_WHITESPACE_RE = re.compile(r"\s+")

# XML-RPC ints are 64-bit signed on the wire.
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


class Base64:
    """A base64 payload.

    Parsed payloads keep their encoded text and are only decoded when
    ``data`` is read, so line breaks and missing padding in the source are
    tolerated.
    """

    __slots__ = ("encoded_value", "_data")

    def __init__(self, data: bytes | bytearray | str | None = None):
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data: bytes | None = bytes(data) if data is not None else None
        self.encoded_value: str | None = (
            base64.b64encode(self._data).decode("ascii") if self._data is not None else None
        )

    @classmethod
    def from_encoded(cls, text: str | None) -> Base64:
        """Wrap already-encoded base64 text without decoding it."""
        obj = cls()
        obj.encoded_value = text or ""
        return obj

    @property
    def data(self) -> bytes:
        """The decoded payload."""
        if self._data is None:
            compact = _WHITESPACE_RE.sub("", self.encoded_value or "")
            compact += "=" * (-len(compact) % 4)
            try:
                self._data = base64.b64decode(compact, validate=True)
            except (binascii.Error, ValueError) as e:
                raise XmlRpcValueError(f"Invalid base64 value: {e}", tag="base64") from e
        return self._data

    def __str__(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Base64):
            return self.data == other.data
        if isinstance(other, (bytes, bytearray)):
            return self.data == bytes(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.data)

    def __repr__(self) -> str:
        return f"Base64({self.encoded_value!r})"


Value = Union[None, bool, int, float, str, datetime, date, Base64, list, dict]


def element_children(element: etree._Element) -> list[etree._Element]:
    """Child elements, skipping comments and processing instructions."""
    return [child for child in element if isinstance(child.tag, str)]


def element_text(element: etree._Element) -> str:
    """Concatenated text content, ignoring comments and processing instructions."""
    return str(element.xpath("string()"))


def _check_int_range(value: int) -> int:
    if not INT_MIN <= value <= INT_MAX:
        raise XmlRpcValueError(f"int value out of 64-bit range: {value}", tag="int")
    return value


def _parse_int(text: str) -> int:
    try:
        value = int(text.strip())
    except ValueError as e:
        raise XmlRpcValueError(f"Invalid int value: {text!r}", tag="int") from e
    return _check_int_range(value)


def _parse_double(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError as e:
        raise XmlRpcValueError(f"Invalid double value: {text!r}", tag="double") from e


def parse_value(element: etree._Element | None) -> Value:
    """
    Convert an XML-RPC ``<value>`` element to a Python value.

    Returns None when ``element`` is None. An element without a type
    sub-element is an implicit string. Raises XmlRpcValueError for unknown
    type tags or malformed scalar text.
    """
    if element is None:
        return None
    children = element_children(element)
    if not children:
        return element_text(element)

    typed = children[0]
    kind = typed.tag
    if kind == "string":
        return element_text(typed)
    if kind in ("int", "i4"):
        return _parse_int(element_text(typed))
    if kind == "boolean":
        return element_text(typed) in ("1", "true")
    if kind == "double":
        return _parse_double(element_text(typed))
    if kind == "dateTime.iso8601":
        return parse_iso8601(element_text(typed))
    if kind == "base64":
        return Base64.from_encoded(element_text(typed))
    if kind == "array":
        return [parse_value(item) for item in typed.iterfind("data/value")]
    if kind == "struct":
        members: dict[str, Value] = {}
        for member in typed.iterfind("member"):
            name = member.find("name")
            if name is None:
                raise XmlRpcValueError("Struct member without a name", tag="struct")
            members[element_text(name)] = parse_value(member.find("value"))
        return members
    raise XmlRpcValueError(f"Unknown data type in value: {kind}", tag=str(kind))


def _text_element(parent: etree._Element, tag: str, text: str) -> etree._Element:
    child = etree.SubElement(parent, tag)
    try:
        child.text = text
    except ValueError as e:
        # lxml rejects control characters that XML 1.0 cannot carry.
        parent.remove(child)
        raise XmlRpcValueError(f"Cannot encode {tag} value: {e}", tag=tag) from e
    return child


def build_value(parent: etree._Element, value: Any) -> None:
    """
    Append the typed XML-RPC element for ``value`` to ``parent``.

    None emits nothing; callers omit the enclosing ``<value>`` themselves.
    Array items and struct members that are None are skipped. Values of
    unknown types are rendered as strings.
    """
    if value is None:
        return
    if isinstance(value, bool):
        _text_element(parent, "boolean", "true" if value else "false")
    elif isinstance(value, int):
        _text_element(parent, "int", str(_check_int_range(value)))
    elif isinstance(value, float):
        _text_element(parent, "double", repr(value))
    elif isinstance(value, (datetime, date)):
        _text_element(parent, "dateTime.iso8601", format_iso8601(value))
    elif isinstance(value, Base64):
        _text_element(parent, "base64", str(value))
    elif isinstance(value, (bytes, bytearray)):
        _text_element(parent, "base64", str(Base64(value)))
    elif isinstance(value, (list, tuple)):
        data = etree.SubElement(etree.SubElement(parent, "array"), "data")
        for item in value:
            if item is None:
                continue
            build_value(etree.SubElement(data, "value"), item)
    elif isinstance(value, Mapping):
        struct = etree.SubElement(parent, "struct")
        for key, item in value.items():
            if item is None:
                continue
            member = etree.SubElement(struct, "member")
            _text_element(member, "name", str(key))
            build_value(etree.SubElement(member, "value"), item)
    else:
        _text_element(parent, "string", str(value))


def render_value(value: Any) -> str:
    """Render ``value`` as its typed XML fragment (without the ``<value>`` wrapper)."""
    holder = etree.Element("value")
    build_value(holder, value)
    return "".join(etree.tostring(child, encoding="unicode") for child in holder)
