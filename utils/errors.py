"""
Custom exception classes for the configuration loader.

These provide a hierarchy of typed exceptions for better error handling.
"""


class MapConfigError(Exception):
    """Base exception for configuration loader errors."""

    pass


class ConfigError(MapConfigError):
    """Exception raised for settings or declaration problems."""

    pass


class ConfigParseError(ConfigError):
    """Raised when a declared JSON value (config or language list) cannot be parsed."""

    def __init__(self, message: str, raw: str | None = None) -> None:
        super().__init__(message)
        self.raw = raw


class ConfigInitializationError(MapConfigError):
    """Raised from the initialization handle when loading configuration failed."""

    def __init__(self, message: str, lang: str | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.lang = lang
        self.url = url


class ServiceError(MapConfigError):
    """Exception raised for service-related errors."""

    pass
