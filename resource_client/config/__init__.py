"""Configuration module: client settings."""

from resource_client.config.settings import ClientSettings

__all__ = [
    "ClientSettings",
]
