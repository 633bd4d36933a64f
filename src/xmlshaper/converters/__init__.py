"""Value-to-XML converter package."""

from .base import XML_DECLARATION, XPATH_FUNCTIONS_NS, BaseDialect
from .default_dialect import DefaultDialect
from .dialect_selector import DialectSelector, convert_to_xml, dicttoxml
from .helpers import IdGenerator, escape_xml, make_attr_string, make_valid_xml_name, wrap_cdata
from .xpath_dialect import XPathDialect, convert_to_xpath31

__all__ = [
    "BaseDialect",
    "DefaultDialect",
    "DialectSelector",
    "IdGenerator",
    "XML_DECLARATION",
    "XPATH_FUNCTIONS_NS",
    "XPathDialect",
    "convert_to_xml",
    "convert_to_xpath31",
    "dicttoxml",
    "escape_xml",
    "make_attr_string",
    "make_valid_xml_name",
    "wrap_cdata",
]
