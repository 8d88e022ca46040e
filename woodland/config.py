"""
Engine configuration.

Server bind address, log level, the scenario a fresh session starts from,
and an optional dice seed, kept in a small JSON file. Anything missing from
the file falls back to DEFAULT_CONFIG.
"""

import json
import logging
from pathlib import Path
from typing import TypedDict

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".woodland_config.json"


class EngineConfig(TypedDict, total=False):
    """Engine configuration."""
    host: str
    port: int
    log_level: str  # DEBUG, INFO, WARNING, ...
    default_scenario: int  # Index into the scenario registry
    dice_seed: int | None  # Fixed seed makes API battles reproducible


DEFAULT_CONFIG: EngineConfig = {
    "host": "127.0.0.1",
    "port": 8000,
    "log_level": "INFO",
    "default_scenario": 0,
    "dice_seed": None,
}


def get_config_path(config_dir: Path | str = ".") -> Path:
    return Path(config_dir) / CONFIG_FILENAME


def load_config(config_dir: Path | str = ".") -> EngineConfig:
    """Load config from file, or return defaults if missing or unreadable."""
    path = get_config_path(config_dir)

    if not path.exists():
        return DEFAULT_CONFIG.copy()

    try:
        with open(path, "r", encoding="utf-8") as f:
            saved = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return DEFAULT_CONFIG.copy()

    if not isinstance(saved, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return DEFAULT_CONFIG.copy()

    # Merge with defaults to handle missing keys
    config = DEFAULT_CONFIG.copy()
    config.update(saved)
    return config


def save_config(config: EngineConfig, config_dir: Path | str = ".") -> bool:
    """Save config to file. Returns True on success."""
    path = get_config_path(config_dir)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError as e:
        logger.error("Could not save config %s: %s", path, e)
        return False


def set_default_scenario(index: int, config_dir: Path | str = ".") -> None:
    config = load_config(config_dir)
    config["default_scenario"] = index
    save_config(config, config_dir)


def set_dice_seed(seed: int | None, config_dir: Path | str = ".") -> None:
    """Save a dice seed (None restores random dice)."""
    config = load_config(config_dir)
    config["dice_seed"] = seed
    save_config(config, config_dir)


def set_log_level(level: str, config_dir: Path | str = ".") -> None:
    config = load_config(config_dir)
    config["log_level"] = level.upper()
    save_config(config, config_dir)
