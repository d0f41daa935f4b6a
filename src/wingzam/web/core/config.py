"""Configuration provider for the web container."""

from wingzam.config import ConfigManager, WingzamConfig
from wingzam.system.path_resolver import PathResolver


def get_config(path_resolver: PathResolver | None = None) -> WingzamConfig:
    """Load ``wingzam.yaml`` from the location the resolver points at."""
    return ConfigManager(path_resolver).load()
