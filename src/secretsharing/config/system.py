"""Utilities for locating and loading sharing configuration files."""

import os
from pathlib import Path
from typing import Dict, Optional, Tuple

from secretsharing.config.models import SharingConfig, read_config_file

CONFIG_FILENAME = "secretsharing.yaml"
CONFIG_ENV_VAR = "SECRETSHARING_CONFIG_PATH"


def resolve_config_path(default_path: Optional[Path] = None) -> Path:
    """
    Resolve the path to the sharing configuration file.

    The environment variable wins; relative values are taken from the
    current working directory. Otherwise ``default_path`` is used, falling
    back to ``secretsharing.yaml`` in the working directory.
    """
    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        candidate = Path(env_value)
        if not candidate.is_absolute():
            candidate = (Path.cwd() / candidate).resolve()
        return candidate
    if default_path is not None:
        return Path(default_path).resolve()
    return (Path.cwd() / CONFIG_FILENAME).resolve()


def load_config(default_path: Optional[Path] = None) -> Tuple[Dict, Path]:
    """
    Load the raw sharing configuration.

    Returns:
        (config_dict, resolved_path)

    Raises:
        ConfigurationError: if the file cannot be parsed.
    """
    path = resolve_config_path(default_path)
    if not path.exists():
        return {}, path
    return read_config_file(path), path


def load_sharing_config(default_path: Optional[Path] = None, **overrides: int) -> SharingConfig:
    """Load a ``SharingConfig``, letting keyword overrides replace file values."""
    data, _ = load_config(default_path)
    merged = dict(data)
    merged.update(overrides)
    return SharingConfig.from_mapping(merged)
