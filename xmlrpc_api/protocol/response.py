"""XML-RPC ``<methodResponse>`` messages."""

from __future__ import annotations

from typing import Any

from lxml import etree

from xmlrpc_api.codec.values import Value
from xmlrpc_api.protocol.fault import Fault
from xmlrpc_api.protocol.message import _UNSET, Message
from xmlrpc_api.utils.exceptions import RequestError

_FAULT_MEMBER_XPATH = "fault/value/struct/member[name=$name]/value"


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class Response(Message):
    """
    An XML-RPC response: a single return value or a fault.

    Pass ``xml`` (or ``doc``) to read a response received from a service.
    To build a response, pass either ``value`` (None means no return value)
    or ``fault``.

    Args:
        xml: The response XML text.
        doc: An already parsed response document.
        value: Return value.
        fault: A Fault to return instead of a value.
        indent: Indentation used when building the document.
    """

    def __init__(
        self,
        xml: str | bytes | None = None,
        *,
        doc: etree._ElementTree | etree._Element | None = None,
        value: Any = _UNSET,
        fault: Fault | None = None,
        indent: int = 0,
    ):
        has_document = xml is not None or doc is not None
        has_value = value is not _UNSET
        if has_document and (has_value or fault is not None):
            raise RequestError("You cannot include both xml and value or fault arguments")
        if has_value and fault is not None:
            raise RequestError("You cannot include both value and fault arguments")
        if has_document:
            super().__init__(xml, doc=doc)
        elif fault is not None:
            root = etree.Element("methodResponse")
            fault.build_xml(root)
            self._init_built(root, indent)
        elif has_value:
            root = etree.Element("methodResponse")
            params = etree.SubElement(root, "params")
            if value is not None:
                Message.build_value(etree.SubElement(etree.SubElement(params, "param"), "value"), value)
            self._init_built(root, indent)
        else:
            raise RequestError("You must include either xml, value or fault")
        self._value: Any = _UNSET
        self._fault_code: Any = _UNSET
        self._fault_string: Any = _UNSET

    def _fault_member(self, name: str) -> Value:
        found = self.root.xpath(_FAULT_MEMBER_XPATH, name=name)
        return Message.parse_value(found[0] if found else None)

    @property
    def fault_code(self) -> Value:
        """The fault code, or None for a successful response."""
        if self._fault_code is _UNSET:
            self._fault_code = self._fault_member("faultCode")
        return self._fault_code

    @property
    def fault_string(self) -> Value:
        """The fault message, or None for a successful response."""
        if self._fault_string is _UNSET:
            self._fault_string = self._fault_member("faultString")
        return self._fault_string

    @property
    def value(self) -> Value:
        """The return value, or None when the response carries none."""
        if self._value is _UNSET:
            self._value = Message.parse_value(self.root.find("params/param/value"))
        return self._value

    @property
    def is_valid(self) -> bool:
        """True when the response carries no fault."""
        return _blank(self.fault_code) and _blank(self.fault_string)

    @property
    def fault(self) -> Fault | None:
        if self.is_valid:
            return None
        return Fault(self.fault_code, "" if self.fault_string is None else str(self.fault_string))

    def error(self) -> str | None:
        """The fault string and code, e.g. ``"Too many parameters. (4)"``; None without a fault."""
        if self.is_valid:
            return None
        fault_string = "" if self.fault_string is None else self.fault_string
        return f"{fault_string} ({self.fault_code})"

    def raise_for_fault(self) -> Response:
        """Raise the response's Fault if it carries one."""
        fault = self.fault
        if fault is not None:
            raise fault
        return self

    def __repr__(self) -> str:
        if self.is_valid:
            return "Response(valid)"
        return f"Response(fault={self.error()!r})"
