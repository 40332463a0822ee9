"""Configuration: config manager and the shipped JSON defaults."""

from when.config.config_manager import configure, load_config

__all__ = ["configure", "load_config"]
