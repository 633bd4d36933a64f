"""Dialect selector: dispatches a conversion to the default or XPath 3.1 dialect."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from xmlshaper.models.options import ConversionOptions

from .base import BaseDialect
from .default_dialect import DefaultDialect
from .helpers import IdGenerator, is_sequence
from .xpath_dialect import XPathDialect

logger = logging.getLogger(__name__)


class DialectSelector:
    """Orchestrator: selects the output dialect from the ``xpath_format`` option."""

    _REGISTRY: dict[bool, type[BaseDialect]] = {
        False: DefaultDialect,
        True: XPathDialect,
    }

    def __init__(self, id_generator: IdGenerator | None = None) -> None:
        self._id_generator = id_generator

    def select(self, options: ConversionOptions) -> BaseDialect:
        """Instantiate the dialect registered for the given options."""
        dialect_cls = self._REGISTRY[options.xpath_format]
        logger.debug("Selected %s", dialect_cls.__name__)
        if dialect_cls is DefaultDialect:
            return DefaultDialect(options, id_generator=self._id_generator)
        return dialect_cls(options)

    def convert(self, obj: Any, options: ConversionOptions | None = None) -> str:
        """Convert a value to an XML document with the selected dialect."""
        return self.select(options or ConversionOptions()).run(obj)


def dicttoxml(obj: Any, options: ConversionOptions | None = None, id_generator: IdGenerator | None = None) -> str:
    """Convert any value, including empty containers, to XML text."""
    return DialectSelector(id_generator).convert(obj, options)


def is_empty_document(data: Any) -> bool:
    """``None`` and empty top-level containers produce no document."""
    if data is None:
        return True
    if isinstance(data, Mapping) or is_sequence(data):
        return len(data) == 0
    return False


def convert_to_xml(data: Any, options: ConversionOptions | None = None) -> str | None:
    """Convert a JSON-like value to XML, or return ``None`` when there is nothing to encode."""
    if is_empty_document(data):
        logger.debug("Nothing to convert for %r", data)
        return None
    return dicttoxml(data, options)
