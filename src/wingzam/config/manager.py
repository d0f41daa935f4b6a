"""YAML-backed configuration store."""

import logging
import shutil
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from wingzam.config.models import WingzamConfig
from wingzam.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


class ConfigManager:
    """Reads and writes ``wingzam.yaml``.

    A missing file is created from the model defaults on first load, so a fresh
    install starts with a complete, editable configuration.
    """

    def __init__(self, path_resolver: PathResolver | None = None):
        self.path_resolver = path_resolver or PathResolver()
        self.config_path: Path = self.path_resolver.get_wingzam_config_path()

    def load(self) -> WingzamConfig:
        """Load the configuration, writing defaults first if no file exists.

        Raises:
            ValueError: If the file is not a mapping or its values do not validate
        """
        if not self.config_path.exists():
            logger.info("No configuration at %s, writing defaults", self.config_path)
            self._write(WingzamConfig())
        return self._validate(self._read_mapping())

    def reload(self) -> WingzamConfig:
        """Re-read the configuration from disk."""
        return self.load()

    def save(self, config: WingzamConfig) -> None:
        """Write the configuration, keeping the previous file as ``.yaml.backup``."""
        if self.config_path.exists():
            backup_path = self.config_path.with_suffix(".yaml.backup")
            try:
                shutil.copy2(self.config_path, backup_path)
            except PermissionError:
                logger.warning("Could not create backup at %s", backup_path)

        self._write(config)
        logger.info("Configuration saved to %s", self.config_path)

    def _write(self, config: WingzamConfig) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(
            yaml.safe_dump(config.model_dump(), default_flow_style=False, sort_keys=False)
        )

    def _read_mapping(self) -> dict[str, Any]:
        data = yaml.safe_load(self.config_path.read_text()) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {self.config_path} must contain a mapping")
        return data

    def _validate(self, data: dict[str, Any]) -> WingzamConfig:
        known = WingzamConfig.model_fields.keys()
        unknown = sorted(set(data) - set(known))
        if unknown:
            # Sections left over from older releases are dropped rather than rejected
            logger.warning("Ignoring unknown config fields: %s", unknown)

        try:
            return WingzamConfig.model_validate({k: v for k, v in data.items() if k in known})
        except ValidationError as e:
            raise ValueError(f"Configuration validation failed: {e}") from e
