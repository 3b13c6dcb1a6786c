"""Configuration management."""

from .settings import Settings, DEFAULT_URL_TEMPLATE

__all__ = [
    "Settings",
    "DEFAULT_URL_TEMPLATE",
]
