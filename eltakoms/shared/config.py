"""YAML and .env loading shared by the eltakoms entry points."""

import os
from pathlib import Path
from typing import List, Optional, Union

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigError

# config/ next to the package in a source checkout
REPO_CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "config"
SYSTEM_CONFIG_DIR = Path("/etc/eltakoms")


def get_environment() -> str:
    """Name of the config variant, from ELTAKOMS_ENV (default 'eltakoms')."""
    return os.getenv("ELTAKOMS_ENV", "eltakoms")


def config_search_dirs() -> List[Path]:
    """Directories searched for ``config-{env}.yaml``, first match wins.

    ELTAKOMS_CONFIG_DIR comes first when set, then the checkout's config/
    directory, then /etc/eltakoms.
    """
    dirs = []
    if override := os.getenv("ELTAKOMS_CONFIG_DIR"):
        dirs.append(Path(override))
    dirs.extend([REPO_CONFIG_DIR, SYSTEM_CONFIG_DIR])
    return dirs


def get_config_path(config_dir: Optional[Union[str, Path]] = None) -> Path:
    """Locate ``config-{env}.yaml``.

    Args:
        config_dir: Look only in this directory.

    Returns:
        The first existing candidate, or the candidate in the first search
        directory when none exists.
    """
    name = f"config-{get_environment()}.yaml"
    if config_dir is not None:
        return Path(config_dir) / name

    candidates = [directory / name for directory in config_search_dirs()]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return candidates[0]


def load_yaml_config(config_path: Union[str, Path]) -> dict:
    """Read a YAML mapping, loading a .env file from the working directory first.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    load_dotenv()

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from None

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping, got {type(data).__name__}")
    return data
