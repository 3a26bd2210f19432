"""Path management utilities for airdrop-deployments library."""

from pathlib import Path
from typing import Optional, Union

from .constants import CONFIG_DIRNAME, CONFIG_FILENAME, DEFAULT_ARTIFACTS_DIRNAME


def get_default_config_path() -> Path:
    """
    Get default location of the persisted deployment configuration.

    Returns:
        Path to ./script/.deploy-config.json
    """
    return Path.cwd() / CONFIG_DIRNAME / CONFIG_FILENAME


def get_artifacts_dir(artifacts_root: Optional[Union[Path, str]] = None) -> Path:
    """
    Get the build artifacts directory.

    Args:
        artifacts_root: Custom artifacts directory (defaults to ./out)

    Returns:
        Absolute path to the artifacts directory
    """
    if artifacts_root is None:
        return Path.cwd() / DEFAULT_ARTIFACTS_DIRNAME
    return Path(artifacts_root).absolute()
