"""
Service Container

Owns the HTTP client, language service and configuration service, and the
order they are started and stopped in.
"""

from collections.abc import Mapping
from typing import Any

from config.attributes import DeclaredAttributes
from helpers.http_helper import HTTPClient
from utils.logging import get_logger

from .base import BaseService
from .config_service import ConfigService
from .language_service import LanguageService


class ServiceContainer:
    """
    Central container for the loader's services.

    Provides a single access point for the services and handles
    initialization order and cleanup.
    """

    def __init__(
        self,
        settings: Mapping[str, Any] | None = None,
        attributes: DeclaredAttributes | None = None,
        globals_registry: Mapping[str, Any] | None = None,
        defaults: Mapping[str, Any] | None = None,
        http_client: HTTPClient | None = None,
    ) -> None:
        self.logger = get_logger("services.container")
        self._settings = dict(settings or {})
        self._attributes = attributes
        self._globals_registry = globals_registry
        self._defaults = defaults
        self._http: HTTPClient | None = http_client
        self._language: LanguageService | None = None
        self._config: ConfigService | None = None
        self._initialized = False

    @property
    def http(self) -> HTTPClient:
        """Get the HTTP client."""
        if self._http is None:
            raise RuntimeError("HTTPClient not initialized")
        return self._http

    @property
    def language(self) -> LanguageService:
        """Get the language service."""
        if self._language is None:
            raise RuntimeError("LanguageService not initialized")
        return self._language

    @property
    def config(self) -> ConfigService:
        """Get the configuration service."""
        if self._config is None:
            raise RuntimeError("ConfigService not initialized")
        return self._config

    def get_all_services(self) -> list[BaseService]:
        """Get all services with a lifecycle, for health monitoring."""
        return [self._config] if self._config else []

    async def initialize(self) -> bool:
        """
        Build the services and wait until configuration is ready.

        Returns:
            True if the configuration loaded, False if initialization failed.
        """
        if self._initialized:
            self.logger.warning("ServiceContainer already initialized")
            return self.config.is_initialized

        self.logger.info("Initializing services")

        if self._http is None:
            self._http = HTTPClient.from_settings(self._settings)
        self._language = LanguageService.from_settings(self._settings)

        attributes = self._attributes or DeclaredAttributes.from_settings(self._settings)
        self._config = ConfigService(
            self._http,
            language_service=self._language,
            attributes=attributes,
            defaults=self._defaults,
            globals_registry=self._globals_registry,
        )
        self._initialized = True

        await self._config.ready()

        if self._config.is_initialized:
            self.logger.info("All services initialized successfully")
        else:
            self.logger.error("Configuration failed to load; services are degraded")
        return self._config.is_initialized

    async def cleanup(self) -> None:
        """Shut down services and release the HTTP session."""
        self.logger.info("Cleaning up services")
        for service in self.get_all_services():
            await service.shutdown()
        if self._http is not None:
            await self._http.close()
        self._initialized = False

    async def health_check(self) -> dict[str, Any]:
        services = {}
        for service in self.get_all_services():
            services[service.name] = await service.health_check()
        return {
            "services": services,
            "http": self._http.get_health_status() if self._http else None,
        }
