"""
Classification of a declared configuration source.

A declared value is tried, in order, as inline JSON, as the name of a
pre-loaded global object, and finally as a URL template.
"""

import json
from collections.abc import Mapping
from typing import Any

from utils.errors import ConfigParseError
from utils.logging import get_logger
from utils.types import (
    AbsentSource,
    ConfigSource,
    GlobalSource,
    InlineSource,
    UrlTemplateSource,
)

logger = get_logger(__name__)

LANG_PLACEHOLDER = "$LANG"


def parse_inline_config(raw: str) -> dict[str, Any]:
    """
    Parse ``raw`` as an inline JSON configuration document.

    Raises:
        ConfigParseError: If ``raw`` is not JSON or is JSON but not an object.
    """
    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ConfigParseError(f"Not valid JSON: {e}", raw=raw) from e

    if not isinstance(value, dict):
        raise ConfigParseError(
            f"Inline config must be a JSON object, got {type(value).__name__}", raw=raw
        )
    return value


def classify_source(
    raw: str | None,
    globals_registry: Mapping[str, Any] | None = None,
) -> ConfigSource:
    """
    Decide which kind of source ``raw`` declares.

    Args:
        raw: The declared config attribute, or None when absent.
        globals_registry: Pre-loaded configuration objects the host
            registered by name.

    Returns:
        One of InlineSource, GlobalSource, UrlTemplateSource or AbsentSource.
    """
    if raw is None or not raw.strip():
        return AbsentSource()

    try:
        return InlineSource(payload=parse_inline_config(raw))
    except ConfigParseError as e:
        logger.info(
            "Config attribute is not inline JSON (%s); attempting to load a file with this name",
            e,
        )

    name = raw.strip()
    if globals_registry and name in globals_registry:
        payload = globals_registry[name]
        if isinstance(payload, Mapping):
            logger.info("Using pre-loaded global config %r", name)
            return GlobalSource(name=name, payload=dict(payload))
        logger.warning(
            "Global %r is not a mapping (%s); treating declaration as a URL template",
            name,
            type(payload).__name__,
        )

    return UrlTemplateSource(template=raw)


def expand_template(template: str, lang: str) -> str:
    """Substitute ``lang`` for the placeholder in ``template``."""
    return template.replace(LANG_PLACEHOLDER, lang)
