"""Default dialect: mapping keys become element names, list items repeat a tag."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from xmlshaper.models.options import ConversionOptions, NamespaceValue

from .base import XML_DECLARATION, BaseDialect
from .helpers import (
    FLAT_MARKER,
    IdGenerator,
    escape_xml,
    get_xml_type,
    is_primitive,
    is_sequence,
    make_attr_string,
    make_valid_xml_name,
    strip_flat_marker,
    to_text,
    wrap_cdata,
)

logger = logging.getLogger(__name__)

ATTRS_KEY = "@attrs"
VAL_KEY = "@val"


def build_namespace_string(namespaces: Mapping[str, NamespaceValue]) -> str:
    """Render namespace declarations for the root element's opening tag."""
    parts: list[str] = []
    for prefix, value in namespaces.items():
        if prefix == "xsi":
            if not isinstance(value, Mapping):
                logger.debug("Ignoring xsi namespace that is not a mapping: %r", value)
                continue
            for attr, uri in value.items():
                if attr == "schemaInstance":
                    parts.append(f' xmlns:xsi="{escape_xml(to_text(uri))}"')
                elif attr == "schemaLocation":
                    parts.append(f' xsi:schemaLocation="{escape_xml(to_text(uri))}"')
        elif prefix == "xmlns":
            parts.append(f' xmlns="{escape_xml(to_text(value))}"')
        else:
            parts.append(f' xmlns:{prefix}="{escape_xml(to_text(value))}"')
    return "".join(parts)


class DefaultDialect(BaseDialect):
    """Encodes values the dicttoxml way: sorted keys, optional type attributes, item wrapping."""

    def __init__(self, options: ConversionOptions | None = None, id_generator: IdGenerator | None = None) -> None:
        super().__init__(options)
        self.id_generator = id_generator or IdGenerator()

    def transcode(self, obj: Any) -> str:
        parent = self.options.custom_root if self.options.root else ""
        logger.debug("Transcoding %s value (parent=%r)", get_xml_type(obj), parent)
        return self.convert(obj, parent)

    def assemble(self, fragment: str) -> str:
        # Namespaces live on the root wrapper, so they are dropped without one
        if not self.options.root:
            return fragment
        root = self.options.custom_root
        namespaces = build_namespace_string(self.options.xml_namespaces)
        return f"{XML_DECLARATION}<{root}{namespaces}>{fragment}</{root}>"

    def convert(self, obj: Any, parent: str) -> str:
        """Route a value to the converter for its kind."""
        item_name = self.options.item_func(parent)
        if obj is None:
            return self.convert_none(item_name)
        if isinstance(obj, bool):
            return self.convert_bool(item_name, obj)
        if isinstance(obj, Mapping):
            return self.convert_dict(obj, parent)
        if is_sequence(obj):
            return self.convert_list(obj, parent)
        return self.convert_kv(item_name, obj)

    def convert_dict(self, obj: Mapping[Any, Any], parent: str) -> str:
        """Convert a mapping into sibling elements, one per key in sorted order."""
        parts: list[str] = []
        for raw_key in sorted(obj, key=str):
            value = obj[raw_key]
            attrs: dict[str, Any] = {}
            if self.options.ids:
                attrs["id"] = self.id_generator.unique_id(parent)
            key, attrs = make_valid_xml_name(str(raw_key), attrs)

            if value is None:
                parts.append(self.convert_none(key, attrs))
            elif isinstance(value, bool):
                parts.append(self.convert_bool(key, value, attrs))
            elif isinstance(value, Mapping):
                parts.append(self.dict_to_xml_str(attrs, value, key, parent_is_list=False, parent=parent))
            elif is_sequence(value):
                parts.append(self.list_to_xml_str(attrs, value, key))
            else:
                parts.append(self.convert_kv(key, value, attrs))
        return "".join(parts)

    def convert_list(self, items: Sequence[Any], parent: str) -> str:
        """
        Convert a sequence into repeated elements.

        Primitive items are named by ``item_func(parent)``, or repeat the
        parent's own tag when ``item_wrap`` is off.
        """
        item_name, _ = strip_flat_marker(self.options.item_func(parent))
        primitive_name = item_name if self.options.item_wrap else parent
        parts: list[str] = []
        for item in items:
            attrs: dict[str, Any] = {}
            if isinstance(item, Mapping):
                parts.append(self.dict_to_xml_str(attrs, item, item_name, parent_is_list=True, parent=parent))
            elif is_sequence(item):
                parts.append(self.list_to_xml_str(attrs, item, item_name))
            elif item is None:
                parts.append(self.convert_none(primitive_name, attrs))
            elif isinstance(item, bool):
                parts.append(self.convert_bool(primitive_name, item, attrs))
            else:
                parts.append(self.convert_kv(primitive_name, item, attrs))
        return "".join(parts)

    def dict_to_xml_str(
        self,
        attrs: dict[str, Any],
        item: Mapping[Any, Any],
        item_name: str,
        parent_is_list: bool,
        parent: str,
    ) -> str:
        """
        Convert a nested mapping, honouring the ``@attrs``, ``@val`` and ``@flat`` keys.

        The meta keys are read from a copy; the caller's mapping is never modified.
        """
        opts = self.options
        if opts.attr_type:
            attrs["type"] = get_xml_type(item)

        remaining = dict(item)
        custom_attrs = remaining.get(ATTRS_KEY)
        if isinstance(custom_attrs, Mapping):
            val_attrs: Mapping[str, Any] = custom_attrs
            del remaining[ATTRS_KEY]
        else:
            val_attrs = attrs

        content: Any = remaining
        if VAL_KEY in remaining:
            content = remaining.pop(VAL_KEY)

        flat = False
        if FLAT_MARKER in remaining:
            flat = remaining.pop(FLAT_MARKER) is True

        if is_primitive(content):
            subtree = escape_xml(to_text(content))
        else:
            subtree = self.convert(content, item_name)

        if parent_is_list and opts.list_headers:
            attr_string = make_attr_string(val_attrs) if not opts.item_wrap else ""
            return f"<{parent}{attr_string}>{subtree}</{parent}>"
        if flat or (parent_is_list and not opts.item_wrap):
            return subtree

        attr_string = make_attr_string(val_attrs)
        return f"<{item_name}{attr_string}>{subtree}</{item_name}>"

    def list_to_xml_str(self, attrs: dict[str, Any], items: Sequence[Any], item_name: str) -> str:
        """Convert a sequence found under a mapping key, wrapping it in that key's tag."""
        opts = self.options
        if opts.attr_type:
            attrs["type"] = get_xml_type(items)

        name, flat = strip_flat_marker(item_name)
        subtree = self.convert_list(items, name)

        if flat or opts.list_headers:
            return subtree
        if len(items) > 0 and is_primitive(items[0]) and not opts.item_wrap:
            return subtree

        return f"<{name}{make_attr_string(attrs)}>{subtree}</{name}>"

    def convert_kv(self, key: str, val: Any, attrs: dict[str, Any] | None = None) -> str:
        """Convert a number, string, timestamp or opaque value into an element."""
        key, attrs = make_valid_xml_name(key, attrs)
        if self.options.attr_type:
            attrs["type"] = get_xml_type(val)

        text = to_text(val)
        text = wrap_cdata(text) if self.options.cdata else escape_xml(text)
        return f"<{key}{make_attr_string(attrs)}>{text}</{key}>"

    def convert_bool(self, key: str, val: bool, attrs: dict[str, Any] | None = None) -> str:
        key, attrs = make_valid_xml_name(key, attrs)
        if self.options.attr_type:
            attrs["type"] = get_xml_type(val)
        return f"<{key}{make_attr_string(attrs)}>{to_text(val)}</{key}>"

    def convert_none(self, key: str, attrs: dict[str, Any] | None = None) -> str:
        key, attrs = make_valid_xml_name(key, attrs)
        if self.options.attr_type:
            attrs["type"] = get_xml_type(None)
        return f"<{key}{make_attr_string(attrs)}></{key}>"
