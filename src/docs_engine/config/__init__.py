"""Configuration module for docs-engine."""

from docs_engine.config.logging import configure_logging, get_logger
from docs_engine.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "configure_logging", "get_logger"]
