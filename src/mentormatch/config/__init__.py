"""Configuration management for the matching service."""

from .settings import DatabaseSettings, DiscoverySettings, Settings, get_settings, reset_settings

__all__ = ["DatabaseSettings", "DiscoverySettings", "Settings", "get_settings", "reset_settings"]
