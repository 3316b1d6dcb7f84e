from __future__ import annotations

import importlib.util
import logging
import os
import threading
import typing

from plexhooks import settings as default_settings
from plexhooks.exceptions import ImproperlyConfigured

__all__ = ["ConfigLoader"]


ENV_CONFIG = "PLEXHOOKS_CONFIG"

ENV_CONFIG_DIR = "PLEXHOOKS_CONFIG_DIR"

CONFIG_FILE = "settings.py"

MAX_PORT = 65535

logger = logging.getLogger(__name__)

_default_config = None
_config_lock = threading.Lock()


def validate_sensors(value: typing.Any) -> typing.List[typing.Any]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ImproperlyConfigured(
            f"SENSORS must be a list of sensor mappings, got {type(value).__name__}"
        )
    return list(value)


def validate_port(value: typing.Any) -> int:
    if isinstance(value, bool):
        raise ImproperlyConfigured(f"SERVER_PORT must be a port number, got {value!r}")
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ImproperlyConfigured(
            f"SERVER_PORT must be a port number, got {value!r}"
        ) from None
    if not 0 < port <= MAX_PORT:
        raise ImproperlyConfigured(
            f"SERVER_PORT must be between 1 and {MAX_PORT}, got {port}"
        )
    return port


class ConfigLoader:
    """
    Settings for the webhook server: the packaged defaults overridden by
    user ``settings.py`` files. ``SENSORS`` and ``SERVER_PORT`` are checked
    once everything is loaded.

    Raises:
        ImproperlyConfigured: If ``SENSORS`` is not a list or ``SERVER_PORT``
            is not a valid port.
    """

    def __init__(self, config_file: typing.Optional[str] = None) -> None:
        self._config: typing.Dict[str, typing.Any] = {}
        self._load_module(default_settings)

        for file in self._get_config_files(config_file):
            try:
                self.load_from_file(file)
            except (FileNotFoundError, ImportError) as e:
                logger.error(f"Failed to load config files: {e}", exc_info=e)

        self._config["SENSORS"] = validate_sensors(self._config.get("SENSORS"))
        self._config["SERVER_PORT"] = validate_port(self._config.get("SERVER_PORT"))

    def _get_config_files(
        self, config_file: typing.Optional[str] = None
    ) -> typing.Iterator[str]:
        """
        Settings files in the order they are applied: one found under
        PLEXHOOKS_CONFIG_DIR (or the cwd), PLEXHOOKS_CONFIG, then the file
        passed in. Later files override earlier ones.
        """
        file = self._find_settings_file(os.environ.get(ENV_CONFIG_DIR, "."))
        if file:
            yield file

        if ENV_CONFIG in os.environ:
            yield os.environ[ENV_CONFIG]

        if config_file:
            yield config_file

    @staticmethod
    def _find_settings_file(dir_path: str) -> typing.Optional[str]:
        """The settings file in ``dir_path`` or one of its immediate subdirectories."""
        config_path = os.path.join(dir_path, CONFIG_FILE)
        if os.path.isfile(config_path):
            return config_path

        try:
            entries = sorted(os.listdir(dir_path))
        except (PermissionError, FileNotFoundError) as e:
            logger.debug(f"Not searching {dir_path} for {CONFIG_FILE}: {e}")
            return None

        for entry in entries:
            config_path = os.path.join(dir_path, entry, CONFIG_FILE)
            if os.path.isfile(config_path):
                return config_path
        return None

    def _load_module(self, config_module: typing.Any) -> None:
        for field_name in dir(config_module):
            value = getattr(config_module, field_name)
            if not field_name.startswith("__") and not callable(value):
                self._config[field_name.upper()] = value

    def load_from_file(self, config_file: typing.Union[str, os.PathLike]) -> None:
        """
        Apply the settings defined in a Python file.
        Raises:
            FileNotFoundError: If the file does not exist.
            ImportError: If the file cannot be imported.
        """
        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Config file {config_file} does not exist")

        spec = importlib.util.spec_from_file_location("settings", config_file)
        if spec is None or spec.loader is None:
            raise ImportError(f"Config file {config_file} cannot be imported")

        config_module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(config_module)
        self._load_module(config_module)
        logger.debug(f"Loaded settings from {config_file}")

    def get(self, key: str, default: typing.Optional[typing.Any] = None) -> typing.Any:
        value = self._config.get(key, default)
        if value is None:
            raise AttributeError(f"Missing configuration key '{key}'")
        return value

    def platform_config(self) -> typing.Dict[str, typing.Any]:
        """
        Raw platform configuration in the shape consumed by WebhooksPlatform.
        """
        return {
            "sensors": self.get("SENSORS"),
            "verbose": bool(self.get("VERBOSE", False)),
            "server": {
                "host": self.get("SERVER_HOST"),
                "port": self.get("SERVER_PORT"),
            },
        }

    def __getattr__(self, item: str) -> typing.Any:
        if item.startswith("_"):
            raise AttributeError(
                f"'{self.__class__.__name__}' object has no attribute '{item}'"
            )

        return self.get(item.upper())

    def __repr__(self) -> str:
        return f"ConfigLoader <len={len(self._config)}>"

    @classmethod
    def get_lazily_loaded_config(
        cls, config_file: typing.Optional[str] = None
    ) -> "ConfigLoader":
        global _default_config

        if _default_config is not None:
            return _default_config

        with _config_lock:
            if _default_config is None:
                _default_config = cls(config_file=config_file)
        return _default_config
