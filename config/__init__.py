from .attributes import DeclaredAttributes
from .config_loader import ConfigLoader
from .defaults import CONFIG_DEFAULTS

__all__ = ["CONFIG_DEFAULTS", "ConfigLoader", "DeclaredAttributes"]
