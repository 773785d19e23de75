"""Configuration loader with multi-source support."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Generic, Mapping, Optional, Type, TypeVar

import platformdirs
import toml
from pydantic import BaseModel, ValidationError

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)

# CATALOG_PUBLISH_ALBUM_PATHS__LOGGING__LEVEL -> logging.level
ENV_SEPARATOR = "__"


class ConfigLoader(Generic[T]):
    """Loads configuration from layered sources.

    Later sources win:
        1. Defaults file (explicit path, else ./config/defaults.toml)
        2. User config (platform config dir / config.toml)
        3. Environment variables ``<APP>__SECTION__KEY``
    """

    def __init__(
        self,
        config_class: Type[T],
        app_name: str = "catalog-publish",
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.app_name = app_name
        self.config_class = config_class
        self._env = env if env is not None else os.environ
        self._config: Optional[T] = None

    @property
    def env_prefix(self) -> str:
        return self.app_name.upper().replace('-', '_') + ENV_SEPARATOR

    @property
    def user_config_path(self) -> Path:
        return Path(platformdirs.user_config_dir(appname=self.app_name, appauthor=False)) / "config.toml"

    def load(self, defaults_path: Optional[Path] = None) -> T:
        """Load and validate configuration from all sources.

        Args:
            defaults_path: Optional path to a defaults TOML file

        Returns:
            Validated configuration object

        Raises:
            ConfigurationError: If a file is not valid TOML, or the merged
                values fail validation
        """
        config_dict = self._load_defaults(defaults_path)

        user_config = self._read_toml(self.user_config_path)
        if user_config:
            logger.debug(f"Merging user config: {{'path': {str(self.user_config_path)!r}}}")
            config_dict = self._deep_merge(config_dict, user_config)

        config_dict = self._deep_merge(config_dict, self._env_overrides())

        try:
            self._config = self.config_class(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}", app=self.app_name) from e
        return self._config

    def _load_defaults(self, defaults_path: Optional[Path]) -> Dict[str, Any]:
        if defaults_path is not None:
            if not defaults_path.exists():
                raise ConfigurationError(
                    f"Config file not found: {defaults_path}", path=str(defaults_path)
                )
            return self._read_toml(defaults_path) or {}
        return self._read_toml(Path.cwd() / "config" / "defaults.toml") or {}

    def _read_toml(self, path: Path) -> Optional[Dict[str, Any]]:
        if not path.exists():
            return None
        try:
            return toml.load(path)
        except toml.TomlDecodeError as e:
            raise ConfigurationError(f"Invalid TOML in {path}: {e}", path=str(path)) from e

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def _env_overrides(self) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}
        prefix = self.env_prefix
        for env_key, env_value in self._env.items():
            if not env_key.startswith(prefix):
                continue
            key_path = [part.lower() for part in env_key[len(prefix):].split(ENV_SEPARATOR) if part]
            if not key_path:
                continue

            current = overrides
            for part in key_path[:-1]:
                current = current.setdefault(part, {})
            current[key_path[-1]] = self._convert_env_value(env_value)
        return overrides

    def _convert_env_value(self, value: str) -> Any:
        """Convert string environment variable to appropriate type."""
        lowered = value.lower()
        if lowered in ("true", "yes"):
            return True
        if lowered in ("false", "no"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if "," in value:
            return [v.strip() for v in value.split(",")]

        return value

    @property
    def config(self) -> T:
        """Get loaded configuration."""
        if self._config is None:
            self._config = self.load()
        return self._config
