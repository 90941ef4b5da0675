"""
Type definitions and common data structures for the configuration loader.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple


class SourceKind(str, Enum):
    """How a configuration source was declared."""

    INLINE = "inline"
    URL_TEMPLATE = "url_template"
    GLOBAL = "global"
    ABSENT = "absent"


@dataclass(frozen=True)
class InlineSource:
    """A literal JSON object supplied at declaration time."""

    payload: dict[str, Any]
    kind: SourceKind = field(default=SourceKind.INLINE, init=False)


@dataclass(frozen=True)
class UrlTemplateSource:
    """A URL with a language placeholder, fetched once per language."""

    template: str
    kind: SourceKind = field(default=SourceKind.URL_TEMPLATE, init=False)


@dataclass(frozen=True)
class GlobalSource:
    """A named configuration object registered by the host before startup."""

    name: str
    payload: dict[str, Any]
    kind: SourceKind = field(default=SourceKind.GLOBAL, init=False)


@dataclass(frozen=True)
class AbsentSource:
    """No source declared; defaults only."""

    kind: SourceKind = field(default=SourceKind.ABSENT, init=False)


ConfigSource = InlineSource | UrlTemplateSource | GlobalSource | AbsentSource


class InitializationState(str, Enum):
    """Lifecycle of a one-shot service initialization."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    FAILED = "failed"


class FetchResponse(NamedTuple):
    """Result of fetching one configuration document."""

    url: str
    status: int
    data: Any = None
