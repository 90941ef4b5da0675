"""
Language tag helpers.

Language tags arrive as BCP 47-ish strings ("en", "en-CA", "fr_FR"); the
configuration store is keyed by the primary subtag only.
"""

import json
import re

from utils.errors import ConfigParseError
from utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_LANGUAGE = "en"
DEFAULT_LANGUAGES: tuple[str, ...] = ("en", "fr")

_REGION_SEPARATOR = re.compile(r"[-_]")


def normalize_language_tag(tag: str) -> str:
    """Return the primary subtag of ``tag`` ("en-CA" -> "en")."""
    return _REGION_SEPARATOR.split(tag.strip(), maxsplit=1)[0]


def parse_language_list(raw: str) -> list[str]:
    """
    Parse a declared language list.

    Args:
        raw: JSON array of language codes, e.g. '["en", "fr"]'.

    Returns:
        The codes in declaration order, duplicates dropped.

    Raises:
        ConfigParseError: If ``raw`` is not a non-empty JSON array of strings.
    """
    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ConfigParseError(f"Language list is not valid JSON: {e}", raw=raw) from e

    if not isinstance(value, list) or not value:
        raise ConfigParseError("Language list must be a non-empty JSON array", raw=raw)
    if not all(isinstance(item, str) and item.strip() for item in value):
        raise ConfigParseError("Language list must contain only non-empty strings", raw=raw)

    return list(dict.fromkeys(item.strip() for item in value))


def resolve_language_list(raw: str | None) -> list[str]:
    """Parse ``raw``, falling back to the default languages when missing or invalid."""
    if raw:
        try:
            return parse_language_list(raw)
        except ConfigParseError as e:
            logger.warning(
                "Could not parse langs (%s); defaulting to %s",
                e,
                list(DEFAULT_LANGUAGES),
            )
    return list(DEFAULT_LANGUAGES)
