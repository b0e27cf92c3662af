from __future__ import annotations

import time
from typing import NamedTuple

from session_seeder.auth.claims import decode_id_token_claims
from session_seeder.auth.types import TokenResponse
from session_seeder.browser.protocols import SessionStore
from session_seeder.config.settings import AuthSettings
from session_seeder.errors import ClaimsDecodeError
from session_seeder.utils import get_logger

from .entities import AccessTokenEntity, AccountEntity, CacheEntity, IdTokenEntity


logger = get_logger(__name__)


class CacheEntry(NamedTuple):
    key: str
    entity: CacheEntity


def build_cache_entries(
    token_response: TokenResponse,
    settings: AuthSettings,
    *,
    now: int,
) -> list[CacheEntry]:
    """Return the account, id token and access token entries, in that order."""

    claims = decode_id_token_claims(token_response.id_token)
    local_account_id = claims.local_account_id
    realm = claims.realm
    if not local_account_id:
        raise ClaimsDecodeError("id_token has neither an oid nor a sid claim")
    if not realm:
        raise ClaimsDecodeError("id_token has no tid claim")
    home_account_id = claims.home_account_id

    account = AccountEntity(
        home_account_id=home_account_id,
        realm=realm,
        local_account_id=local_account_id,
        username=claims.preferred_username,
        name=claims.name,
    )
    id_token = IdTokenEntity(
        home_account_id=home_account_id,
        client_id=settings.client_id,
        secret=token_response.id_token,
        realm=realm,
    )
    access_token = AccessTokenEntity.issued_at(
        now=now,
        expires_in=token_response.expires_in,
        ext_expires_in=token_response.ext_expires_in,
        scopes=settings.api_scopes,
        home_account_id=home_account_id,
        secret=token_response.access_token,
        client_id=settings.client_id,
        realm=realm,
    )
    return [
        CacheEntry(entity.cache_key(), entity)
        for entity in (account, id_token, access_token)
    ]


async def inject_tokens(
    store: SessionStore,
    token_response: TokenResponse,
    settings: AuthSettings,
    *,
    now: int | None = None,
) -> None:
    """Write the MSAL.js cache entries for ``token_response`` into ``store``.

    Existing values under the same keys are overwritten.
    """

    issued = int(time.time()) if now is None else now
    entries = build_cache_entries(token_response, settings, now=issued)
    for entry in entries:
        await store.set_item(entry.key, entry.entity.to_storage())
    logger.debug(
        "Seeded MSAL cache entries",
        keys=[entry.key for entry in entries],
        cached_at=issued,
    )


__all__ = ["CacheEntry", "build_cache_entries", "inject_tokens"]
