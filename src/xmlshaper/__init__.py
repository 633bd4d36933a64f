"""Convert JSON-like values to XML, in the dicttoxml convention or the XPath 3.1 mapping."""

__version__ = "1.0.0"

from xmlshaper.converters import (  # noqa: E402
    DefaultDialect,
    DialectSelector,
    IdGenerator,
    XPathDialect,
    convert_to_xml,
    dicttoxml,
)
from xmlshaper.models.options import ConversionOptions, default_item_func  # noqa: E402
from xmlshaper.services.json2xml import Json2xml  # noqa: E402
from xmlshaper.services.pretty_printer import pretty_print  # noqa: E402
from xmlshaper.services.reader import read_from_json, read_from_string, read_from_url  # noqa: E402
from xmlshaper.utils.errors import (  # noqa: E402
    ConversionError,
    FetchError,
    FileReadError,
    MalformedXMLError,
    ParseError,
    XmlShaperError,
)

__all__ = [
    "ConversionError",
    "ConversionOptions",
    "DefaultDialect",
    "DialectSelector",
    "FetchError",
    "FileReadError",
    "IdGenerator",
    "Json2xml",
    "MalformedXMLError",
    "ParseError",
    "XPathDialect",
    "XmlShaperError",
    "convert_to_xml",
    "default_item_func",
    "dicttoxml",
    "pretty_print",
    "read_from_json",
    "read_from_string",
    "read_from_url",
]
