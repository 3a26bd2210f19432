"""Persisted deployment configuration for airdrop-deployments library."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import ConfigCorruptionError
from .paths import get_default_config_path

logger = logging.getLogger(__name__)

Record = Dict[str, str]


def _to_record(data: Any) -> Record:
    """
    Validate parsed JSON as a flat string mapping.

    Null values count as unset. Other non-scalar values are dropped with a
    warning; the remaining keys are kept.

    Raises:
        ConfigCorruptionError: If the data is not a JSON object
    """
    if not isinstance(data, dict):
        raise ConfigCorruptionError(f"Expected a JSON object, got {type(data).__name__}")

    record: Record = {}
    for key, value in data.items():
        if value is None:
            continue
        # bool is an int subclass, json.dumps writes it as true/false
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            logger.warning("Ignoring unsupported configuration value for '%s': %r", key, value)
            continue
        record[key] = str(value)
    return record


class ConfigStore:
    """Flat key/value configuration persisted as a single JSON object."""

    def __init__(self, path: Optional[Union[Path, str]] = None):
        """
        Initialize the store.

        Args:
            path: Location of the JSON file
                  If None, uses ./script/.deploy-config.json
        """
        self.path = Path(path) if path is not None else get_default_config_path()

    def _read(self) -> Record:
        """
        Read the persisted record.

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigCorruptionError: If the file is not a valid record
        """
        with open(self.path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigCorruptionError(f"Invalid JSON in {self.path}: {e}") from e
        return _to_record(data)

    def load(self) -> Record:
        """
        Load the persisted record.

        Returns:
            The stored record. Empty if the file doesn't exist or is corrupted;
            a corrupted file is deleted.
        """
        try:
            return self._read()
        except FileNotFoundError:
            return {}
        except ConfigCorruptionError as e:
            logger.warning("Unable to parse configuration (%s): deleting and continuing", e)
            self.path.unlink(missing_ok=True)
            return {}

    def save(self, partial: Mapping[str, Any]) -> Record:
        """
        Merge values onto the persisted record and write it back.

        Args:
            partial: Values to store; these win over persisted ones.
                     None values are skipped.

        Returns:
            The merged record as written

        Creates parent directories if they don't exist.
        """
        try:
            merged = self._read()
        except (FileNotFoundError, ConfigCorruptionError):
            merged = {}

        for key, value in partial.items():
            if value is not None:
                merged[key] = str(value)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(merged, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        return merged
