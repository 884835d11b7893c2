"""Global and per-project configuration.

The global configuration lives in ``~/.rimpub/config.json`` (override the directory
with ``RIMPUB_HOME``). It is loaded once at startup and passed explicitly to whatever
needs it. The per-project configuration is the optional ``.rimpub.toml`` at the root
of a mod folder.
"""

import json
import logging
import os
import tomllib
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from rimpub.exceptions import ConfigError
from rimpub.ignore_rules.rule_set import PROJECT_CONFIG_FILE_NAME
from rimpub.path_resolver import PathResolver, select_resolver
from rimpub.types import PathType

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "RIMPUB_HOME"
CONFIG_FILE_NAME = "config.json"

FIELD_PATH_MODS = "path_mods"
FIELD_NO_ASK = "no_ask"
CONFIG_KEYS = (FIELD_PATH_MODS, FIELD_NO_ASK)

_TRUE_VALUES = {"true", "yes", "y", "1", "on"}
_FALSE_VALUES = {"false", "no", "n", "0", "off"}


@dataclass(frozen=True)
class AppConfig:
    """Settings persisted across invocations.

    Attributes:
        path_mods: The game's local mods directory; the default publish target base.
        no_ask: Clear an existing publish target without asking for confirmation.

    Example:
        >>> config = AppConfig().with_value("no_ask", "yes")
        >>> config.get("no_ask")
        'true'
    """

    path_mods: Optional[Path] = None
    no_ask: bool = False

    def get(self, key: str) -> Optional[str]:
        """Return a value formatted for display, or None when unset.

        Raises:
            ConfigError: If the key is unknown.
        """
        key = _check_key(key)
        if key == FIELD_PATH_MODS:
            return str(self.path_mods) if self.path_mods is not None else None
        return str(self.no_ask).lower()

    def with_value(self, key: str, value: str) -> "AppConfig":
        """Return a copy with one key set from its string form.

        Raises:
            ConfigError: If the key is unknown or the value invalid for it.
        """
        key = _check_key(key)
        if key == FIELD_PATH_MODS:
            value = value.strip()
            if not value:
                raise ConfigError(f"Invalid value for '{FIELD_PATH_MODS}': expected a directory path")
            return replace(self, path_mods=Path(value).expanduser())
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return replace(self, no_ask=True)
        if lowered in _FALSE_VALUES:
            return replace(self, no_ask=False)
        raise ConfigError(f"Invalid value for '{FIELD_NO_ASK}': expected a boolean, got '{value}'")

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data[FIELD_PATH_MODS] = str(self.path_mods) if self.path_mods is not None else None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a JSON object")
        unknown = set(data) - set(CONFIG_KEYS)
        if unknown:
            logger.warning("Ignoring unknown config key(s): %s", ", ".join(sorted(unknown)))
        path_mods = data.get(FIELD_PATH_MODS)
        no_ask = data.get(FIELD_NO_ASK, False)
        if path_mods is not None and not isinstance(path_mods, str):
            raise ConfigError(f"'{FIELD_PATH_MODS}' must be a string")
        if not isinstance(no_ask, bool):
            raise ConfigError(f"'{FIELD_NO_ASK}' must be a boolean")
        return cls(path_mods=Path(path_mods) if path_mods else None, no_ask=no_ask)


def _check_key(key: str) -> str:
    normalized = key.strip().lower()
    if normalized not in CONFIG_KEYS:
        raise ConfigError(f"Unexpected key '{key}' provided; valid keys: {', '.join(CONFIG_KEYS)}")
    return normalized


def get_config_dir() -> Path:
    """Return the directory holding the global config."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".rimpub"


def load_config(config_dir: Optional[PathType] = None, resolver: Optional[PathResolver] = None) -> AppConfig:
    """Load the global config, creating a default one on first run.

    The default detects ``path_mods`` through the platform's PathResolver.

    Raises:
        ConfigError: If the config file exists but cannot be read or parsed.
    """
    directory = Path(config_dir) if config_dir is not None else get_config_dir()
    config_file = directory / CONFIG_FILE_NAME
    if not config_file.exists():
        if directory.exists():
            logger.warning("Config directory exists but config file not found, recreating default config")
        return _make_default(directory, resolver or select_resolver())

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to load config file {config_file}: {e}", path=config_file) from e
    logger.debug("Loaded config from %s", config_file)
    return AppConfig.from_dict(data)


def _make_default(directory: Path, resolver: PathResolver) -> AppConfig:
    logger.info("Creating default config file")
    path_mods = resolver.find_mods_dir()
    if path_mods is None:
        logger.warning("Failed to detect the RimWorld mods directory, '%s' will not be set", FIELD_PATH_MODS)
    else:
        logger.debug("Default '%s' set to %s", FIELD_PATH_MODS, path_mods)
    config = AppConfig(path_mods=path_mods)
    save_config(config, directory)
    return config


def save_config(config: AppConfig, config_dir: Optional[PathType] = None) -> Path:
    """Write the global config and return the file written.

    Raises:
        ConfigError: If the file cannot be written.
    """
    directory = Path(config_dir) if config_dir is not None else get_config_dir()
    config_file = directory / CONFIG_FILE_NAME
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)
            f.write("\n")
    except OSError as e:
        raise ConfigError(f"Failed to write config file {config_file}: {e}", path=config_file) from e
    return config_file


def check_config(config: AppConfig) -> List[str]:
    """Return a list of problems that would prevent publishing with this config."""
    problems = []
    if config.path_mods is None:
        problems.append(f"'{FIELD_PATH_MODS}' not configured")
    elif not config.path_mods.is_dir():
        problems.append(f"'{FIELD_PATH_MODS}': {config.path_mods} does not exist")
    return problems


@dataclass(frozen=True)
class ProjectConfig:
    """Settings read from a mod folder's ``.rimpub.toml``.

    Attributes:
        name: Folder name to publish under; empty means "use the source folder's name".
        build_hook: Command to run after publishing, if any.
    """

    name: str = ""
    build_hook: Optional[Union[str, Tuple[str, ...]]] = None

    @classmethod
    def load(cls, source_dir: PathType) -> Tuple["ProjectConfig", bool]:
        """Read the project config from source_dir.

        Returns:
            The config and whether a file was found.

        Raises:
            ConfigError: If the file exists but is not valid TOML or has bad values.
        """
        config_path = Path(source_dir) / PROJECT_CONFIG_FILE_NAME
        if not config_path.exists():
            logger.debug("No project config found, using default configuration")
            return cls(), False

        logger.debug("Reading project config: %s", config_path)
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to parse {PROJECT_CONFIG_FILE_NAME}: {e}", path=config_path) from e

        name = data.pop("name", "")
        build_hook = data.pop("build_hook", None)
        if not isinstance(name, str):
            raise ConfigError("'name' must be a string", path=config_path)
        if isinstance(build_hook, list):
            if not all(isinstance(part, str) for part in build_hook):
                raise ConfigError("'build_hook' list must contain only strings", path=config_path)
            build_hook = tuple(build_hook)
        elif build_hook is not None and not isinstance(build_hook, str):
            raise ConfigError("'build_hook' must be a string or a list of strings", path=config_path)
        if data:
            logger.warning("Ignoring unknown key(s) in %s: %s", PROJECT_CONFIG_FILE_NAME, ", ".join(sorted(data)))
        return cls(name=name.strip(), build_hook=build_hook or None), True

    def resolve_name(self, source_dir: PathType) -> str:
        """Return the configured name, falling back to the source folder's name.

        Raises:
            ConfigError: If no name is configured and the folder name can't be determined.
        """
        if self.name:
            return self.name
        logger.debug("No 'name' provided in configuration, using folder name instead")
        folder_name = Path(source_dir).resolve().name
        if not folder_name:
            raise ConfigError("Didn't configure 'name' and failed to get directory name")
        return folder_name
