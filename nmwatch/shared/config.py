"""Configuration loading utilities."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_config_path(
    config_name: Optional[str] = None,
    config_dir: Optional[Union[str, Path]] = None,
) -> Path:
    """Get path to a configuration file.

    Args:
        config_name: Name of config file (without path). Defaults to
            publisher.yaml.
        config_dir: Directory containing config files. If None, uses
            NMWATCH_CONFIG_DIR or the 'config' directory at the repo root.

    Returns:
        Path to the configuration file.
    """
    if config_dir is None:
        config_dir = os.getenv("NMWATCH_CONFIG_DIR")

    if config_dir is None:
        # Default to repo_root/config/
        package_dir = Path(__file__).parent.parent.parent
        config_dir = package_dir / "config"

    config_dir = Path(config_dir)

    if config_name is None:
        config_name = "publisher.yaml"

    return config_dir / config_name


def load_yaml_config(
    config_path: Optional[Union[str, Path]] = None,
    load_env: bool = True,
) -> dict:
    """Load a YAML configuration file.

    A ``.env`` file in the same directory is loaded first, without
    overriding variables already set in the environment.

    Args:
        config_path: Path to config file. If None, uses get_config_path().
        load_env: Whether to load the neighbouring .env file.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If config file is invalid YAML.
    """
    config_path = get_config_path() if config_path is None else Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    if load_env:
        load_dotenv(config_path.parent / ".env", override=False)

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def get_log_level(config: dict) -> str:
    """Extract the log level name from config.

    Unknown names fall back to INFO so a typo can't silence the service.
    """
    level = str(config.get("log_level", "INFO")).upper()
    if level not in LOG_LEVELS:
        return "INFO"
    return level
