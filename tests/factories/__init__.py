"""
Test Factories Module

Centralized factory functions for creating settings, settings files and
viewer configuration documents.
"""

from .config_factories import (
    make_minimal_settings,
    make_settings,
    make_viewer_config,
    temp_settings_file,
    write_language_files,
)
from .http_factories import FakeHTTPClient

__all__ = [
    "FakeHTTPClient",
    "make_minimal_settings",
    "make_settings",
    "make_viewer_config",
    "temp_settings_file",
    "write_language_files",
]
