"""
Declared viewer attributes.

The host page declares where the viewer configuration comes from with two
attributes on the root element: ``th-config`` (inline JSON, a URL template or
the name of a pre-loaded global) and ``rv-langs`` (a JSON array of language
codes). Outside a page the same pair can come from the settings file or the
environment.
"""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

CONFIG_ATTRIBUTE = "th-config"
LANGS_ATTRIBUTE = "rv-langs"

CONFIG_ENV_VAR = "RV_CONFIG"
LANGS_ENV_VAR = "RV_LANGS"


@dataclass(frozen=True)
class DeclaredAttributes:
    """Raw, unparsed config-source and language-list declarations."""

    config: str | None = None
    langs: str | None = None

    @classmethod
    def from_element(cls, attrs: Mapping[str, Any]) -> "DeclaredAttributes":
        """Read the attribute pair from a root element's attribute mapping."""
        return cls(
            config=_as_text(attrs.get(CONFIG_ATTRIBUTE)),
            langs=_as_text(attrs.get(LANGS_ATTRIBUTE)),
        )

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "DeclaredAttributes":
        """Read ``viewer.config`` / ``viewer.langs`` from host settings."""
        viewer = settings.get("viewer") or {}
        return cls(
            config=_as_text(viewer.get("config")),
            langs=_as_text(viewer.get("langs")),
        )

    @classmethod
    def from_env(cls) -> "DeclaredAttributes":
        return cls(
            config=os.environ.get(CONFIG_ENV_VAR),
            langs=os.environ.get(LANGS_ENV_VAR),
        )

    def overlay(self, other: "DeclaredAttributes") -> "DeclaredAttributes":
        """Return a copy where values declared in ``other`` take precedence."""
        return DeclaredAttributes(
            config=other.config if other.config is not None else self.config,
            langs=other.langs if other.langs is not None else self.langs,
        )


def _as_text(value: Any) -> str | None:
    # Settings files may carry the language list as a YAML sequence
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value)
