"""Configuration loader with file and environment variable layers."""

import copy
import os
from pathlib import Path
from typing import Any

import yaml

from ghbuild.exceptions import ConfigError
from ghbuild.lib.paths import DEFAULT_CACHE_DIR, get_config_file, get_project_config_file

ENV_PREFIX = "GHBUILD_"

DEFAULT_CONFIG = {
    "cache": {
        "dir": DEFAULT_CACHE_DIR,
        "use_sudo": True,
    },
    "git": {
        "min_version": "1.7.9.0",
        "remote_url": "https://github.com/{repo}.git",
        "default_branch": "master",
    },
    "build": {
        "command": "docker",
        "dockerfile": "Dockerfile",
        "no_cache": True,
        "remove_intermediate": True,
    },
    "credentials": {
        "host": "github.com",
        "store_file": "~/.git-credentials",
        "marker_file": "~/.no_prompting_for_credentials",
    },
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigLoader:
    """
    Load and merge configuration from multiple sources.

    Merge order (lowest to highest priority):
    1. Built-in defaults
    2. User config ($XDG_CONFIG_HOME/ghbuild/config.yaml)
    3. Project config (./ghbuild.yaml)
    4. Environment variables (GHBUILD_*)

    Attributes
    ----------
    config_path : Path
        Path to the user configuration file.
    """

    def __init__(self, config_path: Path | None = None):
        """
        Initialize configuration loader.

        Parameters
        ----------
        config_path : Path or None, optional
            Path to the user config file. If None, uses the default
            config.yaml location, by default None. An explicit path must
            exist; the default location is optional.
        """
        self.explicit_path = config_path is not None
        self.config_path = config_path or get_config_file()

    def _load_yaml_file(self, path: Path) -> dict:
        """
        Load and parse a YAML configuration file.

        Parameters
        ----------
        path : Path
            Path to YAML file to load.

        Returns
        -------
        dict
            Parsed YAML content, or empty dict if file doesn't exist.

        Raises
        ------
        ConfigError
            If the file contains invalid YAML or is not a mapping.
        """
        if not path.exists():
            return {}

        try:
            with open(path) as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigError(f"Expected a mapping at the top of {path}")
        return content

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """
        Deep merge two dictionaries recursively.

        Nested dictionaries are merged recursively. For non-dict values,
        the override value replaces the base value.
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: dict) -> dict:
        """
        Apply environment variable overrides to configuration.

        ``GHBUILD_<SECTION>_<KEY>`` sets ``config[section][key]``. The section
        is matched against the known sections first, so keys that contain
        underscores survive (``GHBUILD_CACHE_USE_SUDO`` -> ``cache.use_sudo``).
        Unknown sections split on the first underscore.

        Parameters
        ----------
        config : dict
            Configuration dictionary to apply overrides to.

        Returns
        -------
        dict
            Configuration with environment variable overrides applied.
        """
        sections = sorted(
            (key for key, value in config.items() if isinstance(value, dict)),
            key=len,
            reverse=True,
        )

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            key_path = env_key[len(ENV_PREFIX) :].lower()
            section = next((s for s in sections if key_path.startswith(f"{s}_")), None)
            if section is None:
                if "_" not in key_path:
                    continue
                section = key_path.split("_", 1)[0]

            final_key = key_path[len(section) + 1 :]
            if not final_key:
                continue
            config.setdefault(section, {})[final_key] = env_value

        return config

    def load(self) -> dict:
        """
        Load and merge configuration from all sources.

        Returns
        -------
        dict
            Merged configuration dictionary with a ``_meta`` section listing
            the files that were read.

        Raises
        ------
        ConfigError
            If a configuration file is invalid, or an explicitly given
            config file does not exist.
        """
        if self.explicit_path and not self.config_path.exists():
            raise ConfigError(f"Config file not found: {self.config_path}")

        config = copy.deepcopy(DEFAULT_CONFIG)

        config = self._deep_merge(config, self._load_yaml_file(self.config_path))
        config = self._deep_merge(config, self._load_yaml_file(get_project_config_file()))
        config = self._apply_env_overrides(config)

        config["_meta"] = {"config_sources": self._get_loaded_sources()}

        return config

    def _get_loaded_sources(self) -> list[str]:
        """Return the configuration files that exist and were loaded."""
        sources = []
        for path in (self.config_path, get_project_config_file()):
            if path.exists():
                sources.append(str(path))
        return sources


def get_config_value(config: dict, key_path: str, default: Any = None) -> Any:
    """
    Get configuration value using dot notation path.

    Parameters
    ----------
    config : dict
        Configuration dictionary to query.
    key_path : str
        Key path in dot notation (e.g., "build.command").
    default : Any, optional
        Default value to return if key doesn't exist, by default None.

    Returns
    -------
    Any
        Configuration value if found, default value otherwise.

    Examples
    --------
    >>> config = {"build": {"command": "podman"}}
    >>> get_config_value(config, "build.command")
    'podman'
    >>> get_config_value(config, "nonexistent.key", "default")
    'default'
    """
    keys = key_path.split(".")
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value


def as_bool(value: Any, key: str = "value") -> bool:
    """
    Interpret a configuration value as a boolean.

    YAML already yields real booleans; environment variables arrive as
    strings such as ``"false"`` or ``"0"``.

    Raises
    ------
    ConfigError
        If the value is not a recognised boolean spelling.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0

    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"Expected a boolean for {key}, got {value!r}")
