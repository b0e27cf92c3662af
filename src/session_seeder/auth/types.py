"""Token endpoint and id token payload models."""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, model_validator


class TokenResponse(BaseModel):
    """Successful response body from the ``/oauth2/v2.0/token`` endpoint.

    Fields the seeder does not use (``token_type``, ``scope``, ``refresh_token``)
    are retained so ``model_dump()`` reproduces the original body.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id_token: str
    access_token: str
    expires_in: int
    ext_expires_in: int

    @model_validator(mode="before")
    @classmethod
    def _default_extended_expiry(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("ext_expires_in") is None:
            data = {**data, "ext_expires_in": data.get("expires_in")}
        return data

    @classmethod
    def from_body(cls, payload: dict[str, Any]) -> Self:
        return cls.model_validate(payload)


class IdentityClaims(BaseModel):
    """The subset of id token claims used to key MSAL.js cache entries."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    oid: str | None = None
    sid: str | None = None
    tid: str | None = None
    preferred_username: str | None = None
    name: str | None = None

    @property
    def local_account_id(self) -> str | None:
        return self.oid or self.sid

    @property
    def realm(self) -> str | None:
        return self.tid

    @property
    def home_account_id(self) -> str:
        return f"{self.local_account_id}.{self.tid}"


__all__ = ["IdentityClaims", "TokenResponse"]
