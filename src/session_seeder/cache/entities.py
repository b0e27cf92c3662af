"""MSAL.js browser cache entities.

Field names, field order and key formats mirror what ``@azure/msal-browser``
writes to session storage after an interactive login. MSAL.js looks entries up
by exact key match, so scopes are lowercased in both the ``target`` field and
the access token key.
"""

from __future__ import annotations

import abc
from typing import Literal, Sequence

from pydantic import BaseModel, ConfigDict, Field

ENVIRONMENT = "login.windows.net"
AUTHORITY_TYPE = "MSSTS"
ID_TOKEN_CREDENTIAL = "IdToken"
ACCESS_TOKEN_CREDENTIAL = "AccessToken"
KEY_SEPARATOR = "-"


def normalise_target(scopes: Sequence[str]) -> str:
    """Lowercase scopes and join them with spaces, keeping their order."""

    return " ".join(scope.lower() for scope in scopes)


class CacheEntity(BaseModel):
    """Base class for session storage records."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @abc.abstractmethod
    def cache_key(self) -> str:
        """Session storage key MSAL.js looks this entity up by."""

    def to_storage(self) -> str:
        """Serialize to the compact JSON text stored in session storage."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class AccountEntity(CacheEntity):
    authority_type: str = Field(default=AUTHORITY_TYPE, alias="authorityType")
    # blank; homeAccountId is supplied directly
    client_info: str = Field(default="", alias="clientInfo")
    home_account_id: str = Field(alias="homeAccountId")
    environment: str = ENVIRONMENT
    realm: str
    local_account_id: str = Field(alias="localAccountId")
    username: str | None = None
    name: str | None = None

    def cache_key(self) -> str:
        return KEY_SEPARATOR.join(
            [self.home_account_id, self.environment, self.realm]
        )


class IdTokenEntity(CacheEntity):
    credential_type: Literal["IdToken"] = Field(
        default=ID_TOKEN_CREDENTIAL, alias="credentialType"
    )
    home_account_id: str = Field(alias="homeAccountId")
    environment: str = ENVIRONMENT
    client_id: str = Field(alias="clientId")
    secret: str
    realm: str

    def cache_key(self) -> str:
        return KEY_SEPARATOR.join(
            [
                self.home_account_id,
                self.environment,
                self.credential_type.lower(),
                self.client_id,
                self.realm,
                "",
            ]
        )


class AccessTokenEntity(CacheEntity):
    home_account_id: str = Field(alias="homeAccountId")
    credential_type: Literal["AccessToken"] = Field(
        default=ACCESS_TOKEN_CREDENTIAL, alias="credentialType"
    )
    secret: str
    cached_at: str = Field(alias="cachedAt")
    expires_on: str = Field(alias="expiresOn")
    extended_expires_on: str = Field(alias="extendedExpiresOn")
    environment: str = ENVIRONMENT
    client_id: str = Field(alias="clientId")
    realm: str
    target: str

    @classmethod
    def issued_at(
        cls,
        *,
        now: int,
        expires_in: int,
        ext_expires_in: int,
        scopes: Sequence[str],
        **fields: str,
    ) -> "AccessTokenEntity":
        """Build an entity whose expiry timestamps are relative to ``now``."""
        return cls(
            cached_at=str(now),
            expires_on=str(now + expires_in),
            extended_expires_on=str(now + ext_expires_in),
            target=normalise_target(scopes),
            **fields,
        )

    def cache_key(self) -> str:
        return KEY_SEPARATOR.join(
            [
                self.home_account_id,
                self.environment,
                self.credential_type.lower(),
                self.client_id,
                self.realm,
                self.target,
            ]
        )


__all__ = [
    "ACCESS_TOKEN_CREDENTIAL",
    "AUTHORITY_TYPE",
    "AccessTokenEntity",
    "AccountEntity",
    "CacheEntity",
    "ENVIRONMENT",
    "ID_TOKEN_CREDENTIAL",
    "IdTokenEntity",
    "normalise_target",
]
