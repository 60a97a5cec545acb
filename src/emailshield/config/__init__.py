"""Application configuration."""

from emailshield.config.settings import AppConfig, load_config, load_yaml

__all__ = ["AppConfig", "load_config", "load_yaml"]
