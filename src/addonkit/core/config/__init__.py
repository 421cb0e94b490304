"""addonkit configuration: layered YAML loading and typed settings."""
from __future__ import annotations

from .manager import ConfigManager, PROJECT_CONFIG_NAMES
from .settings import AddonkitSettings

__all__ = ["ConfigManager", "PROJECT_CONFIG_NAMES", "AddonkitSettings"]
