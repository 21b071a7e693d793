"""Configuration loading for TradeMind.

Configuration lives in ``~/.config/trademind/config.toml`` unless the
``TRADEMIND_CONFIG`` environment variable points elsewhere.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml

from trademind.models import UserSettings

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TRADEMIND_CONFIG"


def get_config_dir() -> Path:
    """Directory holding the config file and default profile."""
    return Path.home() / ".config" / "trademind"


def get_config_path() -> Path:
    """Path of the config file, honoring TRADEMIND_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_config_dir() / "config.toml"


def load_config(config_path: Optional[Path] = None) -> Optional[dict]:
    """Load configuration.

    Args:
        config_path: Explicit path (defaults to ``get_config_path()``).

    Returns:
        Config dict or None if not configured or unreadable.
    """
    path = config_path or get_config_path()

    if not path.exists():
        return None

    try:
        return toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Could not read config %s: %s", path, e)
        return None


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Create a template configuration file.

    Returns:
        Path of the written file.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    defaults = UserSettings()
    template = {
        "journal": {
            "profile_path": str(get_config_dir() / "profile.json"),
            "name": "Trader",
            "initial_capital": 10000.0,
        },
        "settings": defaults.model_dump(),
    }

    with open(path, "w") as f:
        toml.dump(template, f)

    return path


def get_profile_path(config: Optional[dict]) -> Path:
    """Profile snapshot path from config, or the default location."""
    configured = (config or {}).get("journal", {}).get("profile_path")
    if configured:
        return Path(configured).expanduser()
    return get_config_dir() / "profile.json"


def settings_from_config(config: Optional[dict]) -> UserSettings:
    """Build UserSettings from the ``[settings]`` table.

    Missing keys fall back to the model defaults; invalid values raise
    pydantic's ValidationError.
    """
    return UserSettings(**(config or {}).get("settings", {}))
