"""Configuration module."""
from .manager import ConfigManager, TrackerConfig

__all__ = ["ConfigManager", "TrackerConfig"]
