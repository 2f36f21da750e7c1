"""lxml parse/serialize primitives shared by messages."""

from __future__ import annotations

from lxml import etree

from xmlrpc_api.utils.exceptions import XmlRpcValueError


def _make_parser(encoding: str | None = None) -> etree.XMLParser:
    # One parser per call; lxml parsers must not be shared across threads.
    return etree.XMLParser(
        encoding=encoding,
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
    )


def parse_document(xml: str | bytes) -> etree._ElementTree:
    """Parse XML text into a document. Raises XmlRpcValueError on malformed input."""
    if isinstance(xml, str):
        data, encoding = xml.encode("utf-8"), "utf-8"
    else:
        data, encoding = bytes(xml), None
    try:
        root = etree.fromstring(data, parser=_make_parser(encoding))
    except (etree.XMLSyntaxError, ValueError) as e:
        raise XmlRpcValueError(f"Malformed XML document: {e}") from e
    if root is None:
        raise XmlRpcValueError("Empty XML document")
    return root.getroottree()


def as_document(doc: etree._ElementTree | etree._Element) -> etree._ElementTree:
    """Accept either a parsed tree or its root element."""
    if isinstance(doc, etree._Element):
        return doc.getroottree()
    if isinstance(doc, etree._ElementTree):
        return doc
    raise XmlRpcValueError(f"Unsupported document type: {type(doc).__name__}")


def serialize(root: etree._Element, indent: int = 0) -> str:
    """
    Serialize ``root`` without an XML declaration.

    With ``indent`` 0 the output is a single line; otherwise each level is
    indented by ``indent`` spaces and the text ends with a newline.
    """
    if indent and indent > 0:
        etree.indent(root, space=" " * indent)
        return etree.tostring(root, encoding="unicode") + "\n"
    return etree.tostring(root, encoding="unicode")
