"""XML pretty-printer: re-indents converter output with lxml."""

import logging
import re

import lxml.etree as ET

from xmlshaper.utils.errors import MalformedXMLError

logger = logging.getLogger(__name__)

DEFAULT_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# Only the declaration itself, not other PIs such as <?xml-stylesheet ...?>
_DECLARATION_RE = re.compile(r"^\s*(<\?xml\s[^?]*\?>)")
# Output without a root wrapper has several top-level elements, so parse inside a holder
_HOLDER_TAG = "xmlshaper-fragment"


def _make_parser() -> ET.XMLParser:
    return ET.XMLParser(remove_blank_text=True, strip_cdata=False, resolve_entities=False, no_network=True)


def _serialize(node: ET._Element | ET._ElementTree, with_tail: bool = True) -> str:
    return ET.tostring(node, encoding="unicode", pretty_print=True, with_tail=with_tail).rstrip("\n")


def _pretty_fragments(body: str) -> list[str]:
    """Pretty-print a sequence of top-level elements, one string per element."""
    try:
        holder = ET.fromstring(f"<{_HOLDER_TAG}>{body}</{_HOLDER_TAG}>".encode("utf-8"), _make_parser())
    except ET.XMLSyntaxError as e:
        raise MalformedXMLError(f"XML is not well-formed: {e}") from e

    if (holder.text or "").strip():
        raise MalformedXMLError("XML is not well-formed: text outside of any element")
    if len(holder) == 0:
        raise MalformedXMLError("XML is not well-formed: no element found")

    parts: list[str] = []
    for child in holder:
        if (child.tail or "").strip():
            raise MalformedXMLError("XML is not well-formed: text outside of any element")
        parts.append(_serialize(child, with_tail=False))
    return parts


def pretty_print(xml: str | bytes) -> str:
    """
    Re-serialize XML with two-space indentation.

    The input's declaration is kept (or the standard one inserted) and
    followed by a newline. A single-root document keeps its doctype and
    top-level processing instructions; several top-level elements are
    accepted as a fragment. Empty elements come back self-closed.
    Raises MalformedXMLError for input that is not well-formed.
    """
    text = xml.decode("utf-8") if isinstance(xml, bytes) else xml
    match = _DECLARATION_RE.match(text)
    declaration = match.group(1) if match else DEFAULT_DECLARATION
    body = text[match.end() :] if match else text

    try:
        root = ET.fromstring(body.encode("utf-8"), _make_parser())
    except ET.XMLSyntaxError:
        logger.debug("Not a single-root document, retrying as a fragment")
        parts = _pretty_fragments(body)
    else:
        parts = [_serialize(root.getroottree())]

    logger.debug("Pretty-printed %d top-level part(s)", len(parts))
    return declaration + "\n" + "\n".join(parts)
