"""Leaf helpers shared by both XML dialects: classifiers, escaping, names, attributes."""

from __future__ import annotations

import numbers
import random
import re
from collections.abc import Mapping, Sequence
from datetime import date, datetime, timezone
from typing import Any

DEFAULT_ID_START = 100000
DEFAULT_ID_END = 999999

_XML_ESCAPES = {
    "&": "&amp;",
    '"': "&quot;",
    "'": "&apos;",
    "<": "&lt;",
    ">": "&gt;",
}
_XML_ESCAPE_RE = re.compile(r"[&\"'<>]")

# Letter or underscore first, then word characters, dots, hyphens and namespace colons
_XML_NAME_RE = re.compile(r"^[^\W\d][\w.:-]*$")
_ASCII_DIGITS_RE = re.compile(r"^[0-9]+$")

FLAT_MARKER = "@flat"


def format_timestamp(value: date) -> str:
    """Format a date or datetime as RFC 3339 text (naive datetimes are taken as UTC)."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        text = value.isoformat(timespec="seconds")
        return text[:-6] + "Z" if text.endswith("+00:00") else text
    return value.isoformat()


def to_text(value: Any) -> str:
    """Natural text form of a value, used everywhere a value is stringified."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, str):
        return value
    if isinstance(value, date):
        return format_timestamp(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def get_xml_type(value: Any) -> str:
    """Return the default-dialect type name: null, bool, int, float, str, dict or list."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, numbers.Integral):
        return "int"
    if isinstance(value, numbers.Real):
        return "float"
    if isinstance(value, Mapping):
        return "dict"
    if is_sequence(value):
        return "list"
    # str, timestamps and every opaque value are written out as text
    return "str"


def is_primitive(value: Any) -> bool:
    return get_xml_type(value) in ("str", "int", "float", "bool", "null")


def get_xpath31_tag_name(value: Any) -> str:
    """Return the XPath 3.1 json-to-xml element name for a value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, Mapping):
        return "map"
    if isinstance(value, numbers.Real):
        return "number"
    if isinstance(value, (str, bytes, bytearray)):
        return "string"
    if is_sequence(value):
        return "array"
    return "string"


def escape_xml(text: str) -> str:
    """Escape the five XML special characters in a single pass."""
    return _XML_ESCAPE_RE.sub(lambda m: _XML_ESCAPES[m.group(0)], text)


def wrap_cdata(text: str) -> str:
    """Wrap text in a CDATA section, splitting any embedded ``]]>`` terminator."""
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def make_attr_string(attrs: Mapping[str, Any] | None) -> str:
    """Render attributes sorted by name, with a single leading space."""
    if not attrs:
        return ""
    parts = [f'{key}="{escape_xml(to_text(attrs[key]))}"' for key in sorted(attrs)]
    return " " + " ".join(parts)


def key_is_valid_xml(key: str) -> bool:
    return bool(key) and _XML_NAME_RE.match(key) is not None


def make_valid_xml_name(key: str, attrs: dict[str, Any] | None = None) -> tuple[str, dict[str, Any]]:
    """
    Turn a mapping key into a legal element name.

    Returns the name together with the attribute dict to render alongside it.
    Keys that cannot be repaired become ``<key name="...">``. The key is
    stored unescaped and escaped once by ``make_attr_string``, so ``a&b``
    renders as ``name="a&amp;b"`` and never as the doubly escaped
    ``name="a&amp;amp;b"``.
    """
    attrs = {} if attrs is None else attrs
    escaped = escape_xml(key)

    if key_is_valid_xml(escaped):
        return escaped, attrs

    if _ASCII_DIGITS_RE.match(escaped):
        return "n" + escaped, attrs

    underscored = escaped.replace(" ", "_")
    if key_is_valid_xml(underscored):
        return underscored, attrs

    # Namespace prefixes and the @flat marker are tolerated as-is
    cleaned = escaped.replace(":", "").replace(FLAT_MARKER, "")
    if key_is_valid_xml(cleaned):
        return escaped, attrs

    attrs["name"] = key
    return "key", attrs


def strip_flat_marker(name: str) -> tuple[str, bool]:
    """Remove a trailing ``@flat`` marker, reporting whether one was present."""
    if name.endswith(FLAT_MARKER):
        return name[: -len(FLAT_MARKER)], True
    return name, False


class IdGenerator:
    """Produces ``<element>_<number>`` ids from an injectable random source."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def make_id(self, element: str, start: int = DEFAULT_ID_START, end: int = DEFAULT_ID_END) -> str:
        start = start or DEFAULT_ID_START
        end = end or DEFAULT_ID_END
        return f"{element}_{self._rng.randint(start, end)}"

    def unique_id(self, element: str) -> str:
        return self.make_id(element, DEFAULT_ID_START, DEFAULT_ID_END)
