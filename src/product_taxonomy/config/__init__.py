"""Configuration utilities for the product taxonomy CLI."""

from .settings import LoggingConfig, OutputConfig, Settings, StoreConfig, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "StoreConfig",
    "OutputConfig",
    "LoggingConfig",
]
