"""Seed MSAL.js session storage from a password-grant login for UI tests."""

from session_seeder.auth import PasswordGrantClient, TokenResponse
from session_seeder.browser import (
    BrowserSession,
    InMemoryBrowserSession,
    PlaywrightBrowserSession,
    SessionStore,
)
from session_seeder.cache import build_cache_entries, inject_tokens
from session_seeder.config import AuthSettings, SettingsManager
from session_seeder.errors import (
    ClaimsDecodeError,
    ConfigurationError,
    SeederError,
    TokenRequestError,
)
from session_seeder.seeder import SessionSeeder, login

__all__ = [
    "AuthSettings",
    "BrowserSession",
    "ClaimsDecodeError",
    "ConfigurationError",
    "InMemoryBrowserSession",
    "PasswordGrantClient",
    "PlaywrightBrowserSession",
    "SeederError",
    "SessionSeeder",
    "SessionStore",
    "SettingsManager",
    "TokenRequestError",
    "TokenResponse",
    "build_cache_entries",
    "inject_tokens",
    "login",
]
