"""High-level conversion facade: JSON-like data in, finished XML document out."""

import logging
from typing import Any

from xmlshaper.converters.dialect_selector import dicttoxml, is_empty_document
from xmlshaper.models.options import ConversionOptions, NamespaceValue
from xmlshaper.services.pretty_printer import pretty_print
from xmlshaper.utils.errors import ConversionError, MalformedXMLError

logger = logging.getLogger(__name__)


class Json2xml:
    """Converts one parsed JSON value to XML with the given shaping flags."""

    def __init__(
        self,
        data: Any,
        wrapper: str = "all",
        root: bool = True,
        pretty: bool = True,
        attr_type: bool = True,
        item_wrap: bool = True,
        xpath_format: bool = False,
        cdata: bool = False,
        list_headers: bool = False,
        ids: bool = False,
        xml_namespaces: dict[str, NamespaceValue] | None = None,
    ) -> None:
        self.data = data
        self.pretty = pretty
        self.options = ConversionOptions(
            root=root,
            custom_root=wrapper,
            ids=ids,
            attr_type=attr_type,
            item_wrap=item_wrap,
            cdata=cdata,
            xml_namespaces=xml_namespaces or {},
            list_headers=list_headers,
            xpath_format=xpath_format,
        )

    def to_xml(self) -> str | None:
        """
        Convert the data to an XML document.

        Returns None when the data is None or an empty mapping or list.
        """
        if is_empty_document(self.data):
            return None

        xml = dicttoxml(self.data, self.options)
        if not self.pretty:
            return xml

        try:
            return pretty_print(xml)
        except MalformedXMLError:
            raise
        except Exception as e:
            raise ConversionError(f"invalid data: {e}") from e

    def to_xml_bytes(self) -> bytes | None:
        xml = self.to_xml()
        return None if xml is None else xml.encode("utf-8")
