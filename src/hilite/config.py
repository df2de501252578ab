import logging
import os
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

COLOR_MODES = ("always", "auto", "never")

BOOL_KEYS = ("ignore_case", "no_highlight", "only_highlight", "vary_group_colors", "full_match")
STR_KEYS = ("color", "reset_foreground", "reset_background")
LIST_KEYS = ("foreground", "background")


def default_config_path() -> str:
    xdg = os.environ.get("XDG_CONFIG_HOME") or "~/.config"
    return os.path.join(os.path.expanduser(xdg), "hilite", "config.yaml")


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads settings from a YAML file.

    Args:
        path: Explicit config file. When None the default location is tried
            and silently skipped if it does not exist.

    Returns:
        The validated settings; keys not present in the file are omitted.
    """
    explicit = path is not None
    path = os.path.expanduser(path) if explicit else default_config_path()
    if not os.path.isfile(path):
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("No config file at %s", path)
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse config file {path}") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}") from e

    logger.debug("Loaded config from %s", path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return validate_config(data, source=path)


def validate_config(data: Dict[str, Any], source: str = "config") -> Dict[str, Any]:
    settings: Dict[str, Any] = {}
    for key, value in data.items():
        if key in BOOL_KEYS:
            if not isinstance(value, bool):
                raise ConfigError(f"{source}: '{key}' must be true or false")
        elif key in STR_KEYS:
            if not isinstance(value, str):
                raise ConfigError(f"{source}: '{key}' must be a string")
            if key == "color" and value not in COLOR_MODES:
                raise ConfigError(f"{source}: 'color' must be one of {', '.join(COLOR_MODES)}")
        elif key in LIST_KEYS:
            if not isinstance(value, list) or not value or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"{source}: '{key}' must be a non-empty list of strings")
        else:
            logger.warning("%s: ignoring unknown key '%s'", source, key)
            continue
        settings[key] = value

    if settings.get("no_highlight") and settings.get("only_highlight"):
        raise ConfigError(f"{source}: 'no_highlight' and 'only_highlight' are mutually exclusive")
    return settings
