# config/config_loader.py

import logging
import os
from pathlib import Path
from typing import Any, ClassVar

import yaml


def _get_project_root() -> Path:
    """Derive project root from this file's location: config/config_loader.py -> project root."""
    return Path(__file__).resolve().parent.parent


class ConfigLoader:
    """
    Singleton class to load and provide access to host settings.

    The settings file describes how the loader itself runs (logging, HTTP
    transport, declared viewer attributes); it is not the viewer
    configuration that ``ConfigService`` resolves.

    Observability:
        - Logs INFO on successful settings load with path
        - Logs WARNING on missing settings file (degraded mode)
        - Logs ERROR on YAML parse errors
        - Tracks config_status for health reporting
    """

    _config: ClassVar[dict[str, Any]] = {}
    _config_status: ClassVar[str] = "not_loaded"  # "ok", "degraded", "error"
    _config_path: ClassVar[str | None] = None

    @classmethod
    def load_config(cls, config_path: str | None = None) -> dict[str, Any]:
        """Load the settings from a YAML file if not already loaded.

        Args:
            config_path: Path to the settings file. If not provided,
                uses SETTINGS_PATH env var or defaults to project_root/config/settings.yaml.

        Returns:
            Dict[str, Any]: Loaded settings dictionary.
        """
        if cls._config_status == "not_loaded":
            # Resolve path with priority: explicit arg > env var > default
            if config_path is None:
                config_path = os.environ.get("SETTINGS_PATH")
                if config_path:
                    logging.info(
                        "Settings path overridden via SETTINGS_PATH env: %s", config_path
                    )

            if config_path is None:
                config_path = str(_get_project_root() / "config" / "settings.yaml")

            cls._config_path = config_path

            try:
                with Path(config_path).open(encoding="utf-8") as file:
                    cls._config = yaml.safe_load(file) or {}

                if not isinstance(cls._config, dict):
                    logging.warning(
                        "Settings file didn't contain a mapping; using empty settings."
                    )
                    cls._config = {}
                    cls._config_status = "degraded"
                else:
                    cls._config_status = "ok"
                    logging.info("Settings loaded successfully from %s", config_path)

                cls._validate_logging_level()

            except FileNotFoundError:
                logging.warning(
                    "Settings file not found at path: %s; "
                    "using empty/default settings (degraded mode).",
                    config_path,
                )
                cls._config = {}
                cls._config_status = "degraded"
            except yaml.YAMLError as e:
                logging.exception(
                    "Error parsing settings YAML at %s: %s; using empty/default settings.",
                    config_path,
                    e,
                )
                cls._config = {}
                cls._config_status = "error"
            except UnicodeDecodeError as e:
                logging.exception(
                    "Encoding error reading settings at %s: %s; using empty/default settings.",
                    config_path,
                    e,
                )
                cls._config = {}
                cls._config_status = "error"
        return cls._config

    @classmethod
    def get_config_status(cls) -> dict[str, Any]:
        """Return settings health status for observability endpoints.

        Returns:
            Dict with config_status, config_path, and whether settings are loaded.
        """
        return {
            "config_status": cls._config_status,
            "config_path": cls._config_path,
            "config_loaded": bool(cls._config),
        }

    @classmethod
    def _validate_logging_level(cls) -> None:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        logging_config = cls._config.get("logging") or {}
        level = str(logging_config.get("level", "INFO")).upper()
        if level not in valid_levels:
            logging.warning(
                f"Invalid logging level '{level}' in settings. Defaulting to 'INFO'."
            )
            logging_cfg = cls._config.setdefault("logging", {})
            logging_cfg["level"] = "INFO"

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """
        Retrieves a value from the settings.

        Args:
            key (str): The key to retrieve. Dotted keys ("http.timeout")
                walk nested sections.
            default (Any, optional): The default value if the key is not found.

        Returns:
            Any: The value associated with the key.
        """
        if key in cls._config:
            return cls._config[key]

        node: Any = cls._config
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    @classmethod
    def reset(cls) -> None:
        """Reset the settings loader state (useful for testing)."""
        cls._config = {}
        cls._config_status = "not_loaded"
        cls._config_path = None
