"""Exception hierarchy shared by the readers, the pretty-printer and the CLI."""

from __future__ import annotations


class XmlShaperError(Exception):
    """Base class for all xmlshaper failures."""


class ParseError(XmlShaperError):
    """Raised when JSON text is empty or malformed."""


class FileReadError(XmlShaperError):
    """Raised when a local JSON file cannot be read or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid JSON file {path}: {reason}")


class FetchError(XmlShaperError):
    """Raised when a URL does not return a parseable JSON response."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"URL {url} is not returning correct response: {reason}")


class MalformedXMLError(XmlShaperError):
    """Raised when the pretty-printer is handed XML that is not well-formed."""


class ConversionError(XmlShaperError):
    """Raised when an unexpected failure occurs while formatting the output."""
