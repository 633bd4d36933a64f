"""Base class and shared constants for the XML output dialects."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from xmlshaper.models.options import ConversionOptions

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" ?>'

# XPath 3.1 json-to-xml namespace
XPATH_FUNCTIONS_NS = "http://www.w3.org/2005/xpath-functions"


class BaseDialect(ABC):
    """Abstract base class for the value-to-XML dialects."""

    def __init__(self, options: ConversionOptions | None = None) -> None:
        self.options = options or ConversionOptions()

    @abstractmethod
    def transcode(self, obj: Any) -> str:
        """Encode a value as an XML fragment, without prolog or document wrapper."""
        ...

    @abstractmethod
    def assemble(self, fragment: str) -> str:
        """Wrap a transcoded fragment into the final document text."""
        ...

    def run(self, obj: Any) -> str:
        """Orchestrate transcode → assemble."""
        return self.assemble(self.transcode(obj))
