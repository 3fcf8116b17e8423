"""
Config system - layered configuration for scopestack.

Sources, later overriding earlier:
1. JSON / YAML config files
2. .env file
3. Environment variables (SCOPESTACK_* prefix)
4. Manual overrides
"""

from typing import Any, Dict, Optional, Type, get_type_hints
from dataclasses import dataclass, fields
from pathlib import Path
import json
import logging
import os

from dotenv import dotenv_values

from .faults import ConfigInvalidFault


logger = logging.getLogger("scopestack.config")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ScopeConfig:
    """
    Process-wide scopestack settings.

    Attributes:
        log_level: Level of the ``scopestack`` logger
        log_format: Format used by the handler installed by ``configure``
        trace_unwind: Log every enter/exit performed by an ExitStack
    """
    log_level: str = "WARNING"
    log_format: str = LOG_FORMAT
    trace_unwind: bool = False

    def __post_init__(self):
        level = str(self.log_level).upper()
        if level not in LOG_LEVELS:
            raise ConfigInvalidFault("log_level", f"unknown level {self.log_level!r}")
        self.log_level = level


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources.

    Usage:
        loader = ConfigLoader.load(paths=["scopestack.yaml"])
        configure(loader.get_config())
    """

    def __init__(self, env_prefix: str = "SCOPESTACK_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[list[str]] = None,
        env_prefix: str = "SCOPESTACK_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "ConfigLoader":
        """
        Load configuration from every source with proper precedence.

        Args:
            paths: Config file paths (glob patterns supported)
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)

        Returns:
            Configured ConfigLoader instance
        """
        loader = cls(env_prefix=env_prefix)

        for pattern in paths or []:
            loader._load_from_files(pattern)

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env()

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return loader

    def _load_from_files(self, pattern: str):
        """Load config from JSON or YAML files."""
        from glob import glob

        for path_str in sorted(glob(pattern)):
            path = Path(path_str)

            if path.suffix == ".json":
                self._load_json_file(path)
            elif path.suffix in (".yaml", ".yml"):
                self._load_yaml_file(path)
            else:
                logger.warning(f"Ignoring config file with unknown suffix: {path}")

    def _load_json_file(self, path: Path):
        """Load config from JSON file."""
        with open(path) as f:
            data = json.load(f)
            self._merge_dict(self.config_data, data)

    def _load_yaml_file(self, path: Path):
        """Load config from YAML file."""
        import yaml
        with open(path) as f:
            data = yaml.safe_load(f)
            if data:
                self._merge_dict(self.config_data, data)

    def _load_env_file(self, path: str):
        """Load config from .env file."""
        env_path = Path(path)
        if not env_path.exists():
            logger.debug(f".env file not found: {env_path}")
            return

        for key, value in dotenv_values(env_path).items():
            if value is not None and key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _load_from_env(self):
        """Load config from environment variables."""
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert SCOPESTACK_SECTION__KEY to nested dict."""
        key = key[len(self.env_prefix):]

        # Split by double underscore for nested keys
        parts = key.lower().split("__")

        current = self.config_data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = self._parse_value(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes", "on"):
            return True
        if value.lower() in ("false", "no", "off"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value by dot-separated path."""
        current = self.config_data

        for part in path.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default

        return current

    def get_config(self, config_class: Type[ScopeConfig] = ScopeConfig) -> ScopeConfig:
        """
        Instantiate and validate a config dataclass from the loaded data.

        Raises:
            ConfigInvalidFault: If a value has the wrong type
        """
        hints = get_type_hints(config_class)
        kwargs = {}

        for field_info in fields(config_class):
            name = field_info.name
            if name not in self.config_data:
                continue

            value = self.config_data[name]
            expected = hints.get(name, Any)
            if expected is not Any and not isinstance(value, expected):
                raise ConfigInvalidFault(
                    name,
                    f"expected {expected.__name__}, got {type(value).__name__}",
                )
            kwargs[name] = value

        unknown = set(self.config_data) - {f.name for f in fields(config_class)}
        if unknown:
            logger.debug(f"Ignoring unknown config keys: {sorted(unknown)}")

        return config_class(**kwargs)

    def to_dict(self) -> dict:
        """Export all config as dictionary."""
        return self.config_data.copy()


# ============================================================================
# Active configuration
# ============================================================================

_active = ScopeConfig()


def get_config() -> ScopeConfig:
    """Return the active process-wide configuration."""
    return _active


def configure(config: Optional[ScopeConfig] = None, **overrides: Any) -> ScopeConfig:
    """
    Activate a configuration and set up the ``scopestack`` logger.

    Args:
        config: Config to activate (defaults to a fresh ScopeConfig)
        **overrides: Field overrides applied on top of ``config``

    Returns:
        The activated config
    """
    global _active

    base = config or ScopeConfig()
    if overrides:
        values = {f.name: getattr(base, f.name) for f in fields(base)}
        unknown = set(overrides) - set(values)
        if unknown:
            raise ConfigInvalidFault(", ".join(sorted(unknown)), "unknown setting")
        values.update(overrides)
        base = ScopeConfig(**values)

    root = logging.getLogger("scopestack")
    root.setLevel(getattr(logging, base.log_level))

    handler = next(
        (h for h in root.handlers if getattr(h, "_scopestack_handler", False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler._scopestack_handler = True
        root.addHandler(handler)
    handler.setFormatter(logging.Formatter(base.log_format))

    _active = base
    logger.debug(f"scopestack configured: {base}")
    return base
