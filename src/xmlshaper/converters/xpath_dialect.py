"""XPath 3.1 json-to-xml dialect (https://www.w3.org/TR/xpath-functions-31/#json-to-xml-mapping)."""

from __future__ import annotations

import logging
from typing import Any

from .base import XML_DECLARATION, XPATH_FUNCTIONS_NS, BaseDialect
from .helpers import escape_xml, get_xpath31_tag_name, to_text

logger = logging.getLogger(__name__)


def convert_to_xpath31(obj: Any, parent_key: str | None = None) -> str:
    """
    Encode a value as ``<map>``/``<array>``/``<string>``/``<number>``/``<boolean>``/``<null>``.

    ``parent_key`` becomes the ``key`` attribute; members of arrays and the
    document root carry none. Meta keys such as ``@attrs`` are plain keys here.
    """
    key_attr = f' key="{escape_xml(parent_key)}"' if parent_key is not None else ""
    tag = get_xpath31_tag_name(obj)

    if tag == "null":
        return f"<null{key_attr}/>"
    if tag == "map":
        children = "".join(convert_to_xpath31(obj[k], str(k)) for k in sorted(obj, key=str))
        return f"<map{key_attr}>{children}</map>"
    if tag == "array":
        children = "".join(convert_to_xpath31(item) for item in obj)
        return f"<array{key_attr}>{children}</array>"
    if tag in ("boolean", "number"):
        return f"<{tag}{key_attr}>{to_text(obj)}</{tag}>"
    return f"<string{key_attr}>{escape_xml(to_text(obj))}</string>"


class XPathDialect(BaseDialect):
    """Maps values onto the XPath 3.1 json-to-xml vocabulary."""

    def transcode(self, obj: Any) -> str:
        logger.debug("Transcoding %s value with the XPath 3.1 mapping", get_xpath31_tag_name(obj))
        return convert_to_xpath31(obj)

    def assemble(self, fragment: str) -> str:
        ns_attr = f' xmlns="{XPATH_FUNCTIONS_NS}"'
        if fragment.startswith("<map"):
            fragment = "<map" + ns_attr + fragment[len("<map") :]
        elif fragment.startswith("<array"):
            fragment = "<array" + ns_attr + fragment[len("<array") :]
        else:
            # A bare scalar root still needs an element to carry the namespace
            fragment = f"<map{ns_attr}>{fragment}</map>"
        return XML_DECLARATION + fragment
