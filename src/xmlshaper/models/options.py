"""Conversion options and CLI default configuration models."""

from collections.abc import Callable
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

# Default config directory
CONFIG_DIR = Path.home() / ".xmlshaper"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Prefix -> URI, or for "xsi" a mapping with schemaInstance / schemaLocation
NamespaceValue = Union[str, dict[str, str]]


def default_item_func(parent: str) -> str:
    """Name list items ``item`` whatever their parent is."""
    return "item"


class ConversionOptions(BaseModel):
    """Shaping rules for a single value-to-XML conversion."""

    model_config = ConfigDict(frozen=True)

    root: bool = True
    custom_root: str = Field(default="root", min_length=1)
    ids: bool = False
    attr_type: bool = True
    item_wrap: bool = True
    item_func: Callable[[str], str] = default_item_func
    cdata: bool = False
    xml_namespaces: dict[str, NamespaceValue] = Field(default_factory=dict)
    list_headers: bool = False
    xpath_format: bool = False


class CliConfig(BaseModel):
    """Defaults for the command line, overridable per invocation."""

    wrapper: str = Field(default="all", min_length=1)
    root: bool = True
    pretty: bool = True
    attr_type: bool = True
    item_wrap: bool = True
    xpath_format: bool = False
    cdata: bool = False
    list_headers: bool = False
    xml_namespaces: dict[str, NamespaceValue] = Field(default_factory=dict)
