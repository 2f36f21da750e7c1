"""XML-RPC ``<methodCall>`` messages."""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Any

from lxml import etree

from xmlrpc_api.codec.values import Value
from xmlrpc_api.protocol.message import _UNSET, Message
from xmlrpc_api.utils.exceptions import RequestError


class Request(Message):
    """
    An XML-RPC request, for receiving or sending.

    When handling a request, pass the request text as ``xml`` (or a parsed
    document as ``doc``); the method name and parameters are read lazily.
    When building a request for a remote service, pass ``method_name`` and
    ``params`` instead. Parameters that are None are left out.

    Args:
        xml: The request XML text.
        doc: An already parsed request document.
        method_name: Method name to invoke.
        params: Parameters for the method; defaults to none.
        indent: Indentation used when building the document.
    """

    def __init__(
        self,
        xml: str | bytes | None = None,
        *,
        doc: etree._ElementTree | etree._Element | None = None,
        method_name: str | None = None,
        params: Sequence[Any] | None = None,
        indent: int = 0,
    ):
        has_document = xml is not None or doc is not None
        if has_document and method_name is not None:
            raise RequestError("You cannot include both xml and method_name arguments")
        if has_document:
            super().__init__(xml, doc=doc)
        elif method_name is not None:
            if isinstance(params, (str, bytes, Mapping)):
                raise RequestError("params must be a sequence of values")
            self._init_built(self._build(method_name, params or ()), indent)
        else:
            raise RequestError("You must include either xml or doc, or method_name and params")
        self._method_name: Any = _UNSET
        self._params: Any = _UNSET

    @staticmethod
    def _build(method_name: str, params: Sequence[Any]) -> etree._Element:
        root = etree.Element("methodCall")
        etree.SubElement(root, "methodName").text = method_name
        params_el = etree.SubElement(root, "params")
        for param in params:
            if param is None:
                continue
            value = etree.SubElement(etree.SubElement(params_el, "param"), "value")
            Message.build_value(value, param)
        return root

    @property
    def method_name(self) -> str | None:
        """The method named in the payload, or None when it has no methodName."""
        if self._method_name is _UNSET:
            element = self.root.find("methodName")
            self._method_name = (element.text or "").strip() if element is not None else None
        return self._method_name

    @property
    def params(self) -> list[Value]:
        """The parameters in the payload, in order; each call returns an independent copy."""
        if self._params is _UNSET:
            self._params = tuple(
                Message.parse_value(param.find("value")) for param in self.root.iterfind("params/param")
            )
        return copy.deepcopy(list(self._params))

    def __repr__(self) -> str:
        return f"Request(method_name={self.method_name!r})"
