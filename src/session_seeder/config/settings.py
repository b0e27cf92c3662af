from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from platformdirs import user_cache_dir

from session_seeder.errors import ConfigurationError

APP_NAME = "SessionSeeder"
ENV_PREFIX = "SESSION_SEEDER_"
DEFAULT_SETTINGS_FILE = "authsettings.json"
DEFAULT_ENV_FILE = ".env"

OIDC_SCOPES: tuple[str, ...] = ("openid", "profile")
TOKEN_PATH = "/oauth2/v2.0/token"

_REQUIRED_FIELDS: tuple[str, ...] = (
    "authority",
    "client_id",
    "client_secret",
    "username",
    "password",
)

_ENV_OVERRIDES: tuple[str, ...] = ("tenant_id", *_REQUIRED_FIELDS)

# JSON settings file keys -> AuthSettings attribute names
_FILE_KEYS: dict[str, str] = {
    "authority": "authority",
    "tenantId": "tenant_id",
    "clientId": "client_id",
    "clientSecret": "client_secret",
    "apiScopes": "api_scopes",
    "username": "username",
    "password": "password",
}


def _cache_dir() -> Path:
    path = Path(user_cache_dir(APP_NAME))
    path.mkdir(parents=True, exist_ok=True)
    return path


def cache_dir() -> Path:
    return _cache_dir()


def log_dir() -> Path:
    path = cache_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def derive_authority(tenant_id: str | None) -> str | None:
    """Return the Entra ID authority for a tenant, or None without one."""
    if not tenant_id:
        return None
    return f"https://login.microsoftonline.com/{tenant_id}"


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """Identity provider and test account data for the password grant.

    Loaded once per test run and passed explicitly to the seeder.
    """

    authority: str
    client_id: str
    client_secret: str = field(repr=False)
    username: str
    password: str = field(repr=False)
    api_scopes: tuple[str, ...] = ()

    @property
    def token_endpoint(self) -> str:
        return self.authority.rstrip("/") + TOKEN_PATH

    @property
    def requested_scope(self) -> str:
        """OIDC scopes followed by the API scopes, space separated."""
        return " ".join((*OIDC_SCOPES, *self.api_scopes))


class SettingsManager:
    """Load AuthSettings from a JSON file with environment overrides."""

    def __init__(
        self,
        settings_file: Path | None = None,
        env_file: Path | None = None,
    ) -> None:
        self._settings_file = settings_file
        self._env_file = env_file or Path(DEFAULT_ENV_FILE)

    @property
    def settings_file(self) -> Path | None:
        return self._settings_file

    @property
    def env_file(self) -> Path:
        return self._env_file

    def load(self) -> AuthSettings:
        values = self._read_settings_file()
        load_dotenv(self._env_file, override=False)

        for key in _ENV_OVERRIDES:
            override = self._get_env(key.upper())
            if override:
                values[key] = override
        scopes = self._get_scopes_from_env()
        if scopes:
            values["api_scopes"] = scopes

        tenant_id = values.pop("tenant_id", None)
        if not values.get("authority"):
            values["authority"] = derive_authority(tenant_id)

        missing = tuple(name for name in _REQUIRED_FIELDS if not values.get(name))
        if missing:
            raise ConfigurationError(
                f"Missing required settings: {', '.join(missing)}",
                missing=missing,
            )

        return AuthSettings(
            authority=str(values["authority"]),
            client_id=str(values["client_id"]),
            client_secret=str(values["client_secret"]),
            username=str(values["username"]),
            password=str(values["password"]),
            api_scopes=tuple(values.get("api_scopes") or ()),
        )

    def _read_settings_file(self) -> dict[str, Any]:
        if self._settings_file is None:
            return {}
        try:
            raw = json.loads(self._settings_file.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ConfigurationError(
                f"Settings file not found: {self._settings_file}"
            ) from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(
                f"Settings file is not valid JSON: {self._settings_file}: {exc}"
            ) from exc
        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"Settings file must contain a JSON object: {self._settings_file}"
            )

        values: dict[str, Any] = {}
        for file_key, attribute in _FILE_KEYS.items():
            if file_key in raw and raw[file_key] is not None:
                values[attribute] = raw[file_key]

        scopes = values.get("api_scopes")
        if scopes is not None and (
            not isinstance(scopes, list)
            or not all(isinstance(scope, str) for scope in scopes)
        ):
            raise ConfigurationError("apiScopes must be a list of strings")
        return values

    def _get_env(self, name: str) -> str | None:
        return os.getenv(f"{ENV_PREFIX}{name}") or None

    def _get_scopes_from_env(self) -> list[str] | None:
        raw = self._get_env("API_SCOPES")
        if not raw:
            return None
        scopes = [scope.strip() for scope in raw.split(";") if scope.strip()]
        return scopes or None


__all__ = [
    "APP_NAME",
    "AuthSettings",
    "OIDC_SCOPES",
    "SettingsManager",
    "cache_dir",
    "derive_authority",
    "log_dir",
]
