"""Base class for XML-RPC requests and responses."""

from __future__ import annotations

from lxml import etree

from xmlrpc_api.codec import values
from xmlrpc_api.codec.document import as_document, parse_document, serialize
from xmlrpc_api.utils.exceptions import XmlRpcValueError

# Marks memoized fields that have not been computed yet.
_UNSET = object()


class Message:
    """
    An XML-RPC message: either a Request or a Response.

    Not intended to be instantiated directly. A message owns exactly one
    document, parsed once at construction from ``xml`` text or adopted from
    an already parsed ``doc``. Messages are immutable after construction, so
    lazily computed fields are memoized without locking.
    """

    parse_value = staticmethod(values.parse_value)
    build_value = staticmethod(values.build_value)

    def __init__(
        self,
        xml: str | bytes | None = None,
        *,
        doc: etree._ElementTree | etree._Element | None = None,
    ):
        if xml is None and doc is None:
            raise XmlRpcValueError("You must include an xml or doc argument when creating a message")
        if xml is not None:
            self._document = parse_document(xml)
            self._xml = xml if isinstance(xml, str) else None
        else:
            self._document = as_document(doc)
            self._xml = None

    def _init_built(self, root: etree._Element, indent: int = 0) -> None:
        self._xml = serialize(root, indent)
        self._document = root.getroottree()

    @property
    def document(self) -> etree._ElementTree:
        return self._document

    @property
    def root(self) -> etree._Element:
        return self._document.getroot()

    @property
    def xml(self) -> str:
        """The XML text of this message."""
        if self._xml is None:
            self._xml = serialize(self.root)
        return self._xml

    def to_bytes(self) -> bytes:
        return self.xml.encode("utf-8")

    def __str__(self) -> str:
        return self.xml
