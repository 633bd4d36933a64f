"""CLI defaults storage."""

import json
import logging

from pydantic import ValidationError

from xmlshaper.models.options import CONFIG_FILE, CliConfig

logger = logging.getLogger(__name__)


def load_config() -> CliConfig:
    """Load CLI defaults from disk. Falls back to built-in defaults on any problem."""
    if not CONFIG_FILE.exists():
        return CliConfig()

    try:
        raw = json.loads(CONFIG_FILE.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read config file: %s", e)
        return CliConfig()

    if not isinstance(raw, dict):
        logger.warning("Ignoring config file %s: expected a JSON object", CONFIG_FILE)
        return CliConfig()

    try:
        return CliConfig(**raw)
    except ValidationError as e:
        logger.warning("Invalid config file %s: %s", CONFIG_FILE, e)
        return CliConfig()
