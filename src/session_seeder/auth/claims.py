"""Unverified id token decoding.

The signature and expiry of the id token are NOT checked. The token comes
straight from the identity provider's token endpoint over TLS in a controlled
test environment; do not reuse this for tokens received from anywhere else.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from pydantic import ValidationError

from session_seeder.errors import ClaimsDecodeError

from .types import IdentityClaims


def decode_payload(token: str) -> dict[str, Any]:
    """Return the raw JSON payload of a compact JWS without verification."""

    parts = token.split(".") if isinstance(token, str) else []
    if len(parts) != 3 or not parts[1]:
        raise ClaimsDecodeError("id_token is not a compact JWT")
    padding = "=" * (-len(parts[1]) % 4)
    try:
        payload = base64.urlsafe_b64decode(parts[1] + padding)
        claims = json.loads(payload)
    except (binascii.Error, ValueError) as exc:
        raise ClaimsDecodeError(
            f"id_token payload could not be decoded: {exc}", inner_error=exc
        ) from exc
    if not isinstance(claims, dict):
        raise ClaimsDecodeError("id_token payload is not a JSON object")
    return claims


def decode_id_token_claims(id_token: str) -> IdentityClaims:
    claims = decode_payload(id_token)
    try:
        return IdentityClaims.model_validate(claims)
    except ValidationError as exc:
        raise ClaimsDecodeError(
            f"id_token claims have unexpected types: {exc}", inner_error=exc
        ) from exc


__all__ = ["decode_id_token_claims", "decode_payload"]
