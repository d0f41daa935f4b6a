"""Wingzam configuration package.

This package provides centralized configuration management with:
- Validation through Pydantic models
- Smart defaults management
- YAML parsing and serialization
"""

from .manager import ConfigManager
from .models import WingzamConfig

__all__ = [
    "ConfigManager",
    "WingzamConfig",
]
