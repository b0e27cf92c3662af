from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal
from urllib.parse import urljoin

from session_seeder.errors import ConfigurationError
from session_seeder.utils import get_logger

if TYPE_CHECKING:
    from playwright.async_api import Page


logger = get_logger(__name__)

BLANK_PAGE = "about:blank"

_SET_ITEM = "([key, value]) => window.sessionStorage.setItem(key, value)"
_GET_ITEM = "(key) => window.sessionStorage.getItem(key)"
_KEYS = "() => Object.keys(window.sessionStorage)"
_CLEAR = "() => window.sessionStorage.clear()"

WaitUntil = Literal["commit", "domcontentloaded", "load", "networkidle"]


class PlaywrightSessionStore:
    """``window.sessionStorage`` of a Playwright page."""

    def __init__(self, browser: "PlaywrightBrowserSession") -> None:
        self._browser = browser

    async def set_item(self, key: str, value: str) -> None:
        await self._evaluate(_SET_ITEM, [key, value])

    async def get_item(self, key: str) -> str | None:
        return await self._evaluate(_GET_ITEM, key)

    async def keys(self) -> list[str]:
        return list(await self._evaluate(_KEYS))

    async def clear(self) -> None:
        await self._evaluate(_CLEAR)

    async def _evaluate(self, expression: str, arg: Any = None) -> Any:
        page = await self._browser.ensure_origin()
        if arg is None:
            return await page.evaluate(expression)
        return await page.evaluate(expression, arg)


class PlaywrightBrowserSession:
    """Adapts an async Playwright ``Page`` to the seeder's browser interface.

    Session storage is scoped to an origin, so storage cannot be touched while
    the page is still on ``about:blank``. In that case the page is first sent
    to ``base_url``.
    """

    def __init__(
        self,
        page: "Page",
        base_url: str | None = None,
        *,
        wait_until: WaitUntil = "load",
    ) -> None:
        self._page = page
        self._base_url = base_url
        self._wait_until = wait_until
        self._storage = PlaywrightSessionStore(self)

    @property
    def page(self) -> "Page":
        return self._page

    @property
    def session_storage(self) -> PlaywrightSessionStore:
        return self._storage

    def resolve(self, path: str) -> str:
        if self._base_url is None:
            return path
        return urljoin(self._base_url, path)

    async def navigate(self, path: str) -> None:
        url = self.resolve(path)
        logger.debug("Navigating browser", url=url)
        await self._page.goto(url, wait_until=self._wait_until)

    async def ensure_origin(self) -> "Page":
        if self._page.url in ("", BLANK_PAGE):
            if self._base_url is None:
                raise ConfigurationError(
                    "A base_url is required to access session storage from a blank page"
                )
            await self.navigate(self._base_url)
        return self._page


__all__ = ["PlaywrightBrowserSession", "PlaywrightSessionStore"]
