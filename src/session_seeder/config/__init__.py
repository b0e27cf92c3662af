"""Configuration helpers for the session seeder."""

from .settings import AuthSettings, SettingsManager, derive_authority

__all__ = [
    "AuthSettings",
    "SettingsManager",
    "derive_authority",
]
