from __future__ import annotations

import pytest

from session_seeder.browser.playwright_page import PlaywrightBrowserSession
from session_seeder.browser.protocols import BrowserSession, SessionStore
from session_seeder.errors import ConfigurationError

from tests.stubs import FakePage

BASE_URL = "https://app.example.test"


def test_session_satisfies_browser_protocol() -> None:
    session = PlaywrightBrowserSession(FakePage(), BASE_URL)

    assert isinstance(session, BrowserSession)
    assert isinstance(session.session_storage, SessionStore)


@pytest.mark.asyncio
async def test_navigate_resolves_against_base_url() -> None:
    page = FakePage()
    session = PlaywrightBrowserSession(page, BASE_URL + "/app/")

    await session.navigate("/")

    assert page.goto_calls == [(BASE_URL + "/", "load")]


@pytest.mark.asyncio
async def test_navigate_without_base_url_passes_path_through() -> None:
    page = FakePage(url=BASE_URL + "/")
    session = PlaywrightBrowserSession(page, wait_until="domcontentloaded")

    await session.navigate("/")

    assert page.goto_calls == [("/", "domcontentloaded")]


@pytest.mark.asyncio
async def test_storage_access_from_blank_page_opens_base_url_first() -> None:
    page = FakePage()
    session = PlaywrightBrowserSession(page, BASE_URL)

    await session.session_storage.set_item("key", "value")
    await session.session_storage.set_item("other", "value-2")

    assert page.goto_calls == [(BASE_URL, "load")]
    assert page.session_storage == {"key": "value", "other": "value-2"}


@pytest.mark.asyncio
async def test_storage_round_trip_on_loaded_page() -> None:
    page = FakePage(url=BASE_URL + "/")
    storage = PlaywrightBrowserSession(page).session_storage

    await storage.set_item("a", "1")

    assert await storage.get_item("a") == "1"
    assert await storage.get_item("missing") is None
    assert await storage.keys() == ["a"]
    await storage.clear()
    assert await storage.keys() == []
    assert page.goto_calls == []


@pytest.mark.asyncio
async def test_blank_page_without_base_url_is_a_configuration_error() -> None:
    session = PlaywrightBrowserSession(FakePage())

    with pytest.raises(ConfigurationError):
        await session.session_storage.set_item("key", "value")
