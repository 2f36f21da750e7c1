"""XML-RPC faults."""

from __future__ import annotations

from lxml import etree

from xmlrpc_api.codec.values import build_value
from xmlrpc_api.utils.exceptions import XmlRpcError


class Fault(XmlRpcError):
    """
    An XML-RPC fault with a numeric code and a message.

    Handlers raise a Fault to return a specific code to the caller. Value
    errors map to code -1 and unknown methods to -2; any other exception
    becomes code 0.
    """

    def __init__(self, code: int, message: str):
        super().__init__(message, code=code, details={"fault_code": code})
        self.fault_code = code

    @property
    def fault_string(self) -> str:
        return self.message

    def to_struct(self) -> dict[str, object]:
        # Member order is part of the wire format peers compare against.
        return {"faultString": self.fault_string, "faultCode": self.fault_code}

    def build_xml(self, parent: etree._Element) -> etree._Element:
        """Append ``<fault><value><struct>...`` to ``parent`` and return the fault element."""
        fault = etree.SubElement(parent, "fault")
        build_value(etree.SubElement(fault, "value"), self.to_struct())
        return fault

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fault):
            return NotImplemented
        return self.fault_code == other.fault_code and self.fault_string == other.fault_string

    def __hash__(self) -> int:
        return hash((self.fault_code, self.fault_string))

    def __repr__(self) -> str:
        return f"Fault({self.fault_code!r}, {self.fault_string!r})"
