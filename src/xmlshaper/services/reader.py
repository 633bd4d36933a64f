"""JSON input readers: local files, literal strings and remote URLs."""

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from xmlshaper.utils.errors import FetchError, FileReadError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def read_from_json(path: str | Path) -> Any:
    """Read a JSON file and return the parsed value."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(str(path), str(e)) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise FileReadError(str(path), str(e)) from e

    logger.debug("Read JSON from file %s", path)
    return data


def read_from_string(json_data: str | bytes) -> Any:
    """Parse a JSON string; empty input is an error, not ``None``."""
    if not json_data or not json_data.strip():
        raise ParseError("input is not a proper JSON string: empty input")

    try:
        return json.loads(json_data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"input is not a proper JSON string: {e}") from e


def read_from_url(url: str, params: dict[str, str] | None = None, timeout: float = DEFAULT_TIMEOUT) -> Any:
    """
    Fetch JSON over HTTP GET and return the parsed value.

    Query parameters in ``params`` are merged into the URL. Any transport
    failure, non-2xx status or unparseable body raises ``FetchError``.
    """
    logger.debug("Fetching JSON from %s", url)
    try:
        response = httpx.get(url, params=params, timeout=timeout, follow_redirects=True)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchError(url, str(e)) from e

    if not response.is_success:
        raise FetchError(url, f"HTTP {response.status_code}", status_code=response.status_code)

    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise FetchError(url, f"invalid JSON body: {e}", status_code=response.status_code) from e
