"""
Utilities Package

Common utilities and helper functions for the configuration loader.
"""

from .errors import (
    ConfigError,
    ConfigInitializationError,
    ConfigParseError,
    MapConfigError,
    ServiceError,
)
from .logging import get_logger, setup_logging
from .tasks import spawn
from .types import (
    AbsentSource,
    ConfigSource,
    FetchResponse,
    GlobalSource,
    InitializationState,
    InlineSource,
    SourceKind,
    UrlTemplateSource,
)

__all__ = [
    "AbsentSource",
    "ConfigError",
    "ConfigInitializationError",
    "ConfigParseError",
    "ConfigSource",
    "FetchResponse",
    "GlobalSource",
    "InitializationState",
    "InlineSource",
    "MapConfigError",
    "ServiceError",
    "SourceKind",
    "UrlTemplateSource",
    "get_logger",
    "setup_logging",
    "spawn",
]
