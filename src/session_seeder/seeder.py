from __future__ import annotations

import time
from typing import Callable

import httpx

from session_seeder.auth.token_client import PasswordGrantClient
from session_seeder.auth.types import TokenResponse
from session_seeder.browser.protocols import BrowserSession
from session_seeder.cache.injector import inject_tokens
from session_seeder.config.settings import AuthSettings
from session_seeder.utils import get_logger


logger = get_logger(__name__)

APP_ROOT = "/"

Clock = Callable[[], float]


class SessionSeeder:
    """Signs a test user in by seeding MSAL.js session storage directly.

    ``login`` performs a password grant, writes the account, id token and
    access token cache entries into the browser's session storage, then loads
    the application root so the app picks up the seeded session on startup.
    """

    def __init__(
        self,
        settings: AuthSettings,
        browser: BrowserSession,
        *,
        token_client: PasswordGrantClient | None = None,
        clock: Clock = time.time,
    ) -> None:
        self._settings = settings
        self._browser = browser
        self._token_client = token_client or PasswordGrantClient()
        self._clock = clock

    @property
    def settings(self) -> AuthSettings:
        return self._settings

    async def login(
        self, cached_token_response: TokenResponse | None = None
    ) -> TokenResponse:
        """Seed the session and open the app; returns the token response used.

        When ``cached_token_response`` is given no token request is made and
        session storage is left untouched: entries written by an earlier call
        are assumed to still be present.
        """
        if cached_token_response is None:
            token_response = await self._token_client.acquire(self._settings)
            await inject_tokens(
                self._browser.session_storage,
                token_response,
                self._settings,
                now=int(self._clock()),
            )
        else:
            logger.debug("Reusing cached token response; session storage not seeded")
            token_response = cached_token_response

        await self._browser.navigate(APP_ROOT)
        return token_response


async def login(
    settings: AuthSettings,
    browser: BrowserSession,
    cached_token_response: TokenResponse | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> TokenResponse:
    seeder = SessionSeeder(
        settings,
        browser,
        token_client=PasswordGrantClient(http_client),
    )
    return await seeder.login(cached_token_response)


__all__ = ["APP_ROOT", "SessionSeeder", "login"]
