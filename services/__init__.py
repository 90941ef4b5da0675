"""
Services package for the configuration loader.

This package contains the service classes that resolve the viewer
configuration and track the active language, plus the container that wires
them together.
"""

from .base import BaseService
from .config_service import ConfigService
from .language_service import LanguageService
from .service_container import ServiceContainer

__all__ = [
    "BaseService",
    "ConfigService",
    "LanguageService",
    "ServiceContainer",
]
