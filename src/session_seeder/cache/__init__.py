"""MSAL.js session storage cache entries."""

from .entities import (
    ENVIRONMENT,
    AccessTokenEntity,
    AccountEntity,
    CacheEntity,
    IdTokenEntity,
    normalise_target,
)
from .injector import CacheEntry, build_cache_entries, inject_tokens

__all__ = [
    "ENVIRONMENT",
    "AccessTokenEntity",
    "AccountEntity",
    "CacheEntity",
    "CacheEntry",
    "IdTokenEntity",
    "build_cache_entries",
    "inject_tokens",
    "normalise_target",
]
