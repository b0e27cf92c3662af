from __future__ import annotations

import json

import httpx
import pytest
import respx

from session_seeder.auth.token_client import PasswordGrantClient
from session_seeder.browser.memory import InMemoryBrowserSession
from session_seeder.browser.playwright_page import PlaywrightBrowserSession
from session_seeder.config.settings import AuthSettings
from session_seeder.errors import TokenRequestError
from session_seeder.seeder import SessionSeeder, login

from tests.factories import make_id_token, make_settings, make_token_response
from tests.stubs import FakePage

TOKEN_URL = "https://login.microsoftonline.com/tenant123/oauth2/v2.0/token"
NOW = 1_700_000_000
BASE_URL = "https://app.example.test"


class OrderCheckingBrowser(InMemoryBrowserSession):
    """Records how many entries were present when navigation happened."""

    def __init__(self) -> None:
        super().__init__()
        self.entries_at_navigation: list[int] = []

    async def navigate(self, path: str) -> None:
        self.entries_at_navigation.append(len(self.storage.items))
        await super().navigate(path)


def _seeder(
    settings: AuthSettings, browser: InMemoryBrowserSession
) -> SessionSeeder:
    return SessionSeeder(settings, browser, clock=lambda: NOW + 0.75)


@pytest.mark.asyncio
async def test_login_acquires_injects_then_navigates(
    respx_mock: respx.Router,
    settings: AuthSettings,
    token_body: dict[str, object],
) -> None:
    route = respx_mock.post(TOKEN_URL).mock(
        return_value=httpx.Response(200, json=token_body)
    )
    browser = OrderCheckingBrowser()

    result = await _seeder(settings, browser).login()

    assert route.call_count == 1
    assert len(browser.storage.writes) == 3
    assert len(browser.storage.items) == 3
    assert browser.navigations == ["/"]
    assert browser.entries_at_navigation == [3]
    assert result.model_dump() == token_body


@pytest.mark.asyncio
@pytest.mark.respx(assert_all_called=False)
async def test_login_with_cached_response_skips_request_and_storage(
    respx_mock: respx.Router,
    settings: AuthSettings,
    browser: InMemoryBrowserSession,
) -> None:
    route = respx_mock.post(TOKEN_URL).mock(
        return_value=httpx.Response(200, json={})
    )
    cached = make_token_response(access_token="cached-AT")

    result = await _seeder(settings, browser).login(cached)

    assert route.call_count == 0
    assert browser.storage.writes == []
    assert browser.navigations == ["/"]
    assert result is cached


@pytest.mark.asyncio
async def test_end_to_end_seeded_access_token(
    respx_mock: respx.Router,
    browser: InMemoryBrowserSession,
) -> None:
    settings = make_settings(
        authority="https://login.microsoftonline.com/tenant123",
        client_id="abc",
        api_scopes=("User.Read",),
        username="u@x.com",
        password="p",
    )
    respx_mock.post(TOKEN_URL).mock(
        return_value=httpx.Response(
            200,
            json={
                "id_token": make_id_token(
                    tid="tenant123", oid="obj1", preferred_username="u@x.com"
                ),
                "access_token": "AT1",
                "expires_in": 3600,
                "ext_expires_in": 7200,
            },
        )
    )

    await SessionSeeder(settings, browser).login()

    prefix = "obj1.tenant123-login.windows.net-accesstoken-abc-tenant123-"
    matches = [key for key in browser.storage.items if key.startswith(prefix)]
    assert len(matches) == 1
    value = json.loads(browser.storage.items[matches[0]])
    assert value["target"] == "user.read"
    assert value["secret"] == "AT1"
    assert int(value["expiresOn"]) - int(value["cachedAt"]) == 3600
    assert int(value["extendedExpiresOn"]) - int(value["cachedAt"]) == 7200


@pytest.mark.asyncio
async def test_login_uses_clock_for_cached_at(
    respx_mock: respx.Router,
    settings: AuthSettings,
    token_body: dict[str, object],
    browser: InMemoryBrowserSession,
) -> None:
    respx_mock.post(TOKEN_URL).mock(return_value=httpx.Response(200, json=token_body))

    await _seeder(settings, browser).login()

    access = json.loads(browser.storage.writes[2][1])
    assert access["cachedAt"] == str(NOW)


@pytest.mark.asyncio
async def test_failed_token_request_aborts_before_storage_and_navigation(
    respx_mock: respx.Router,
    settings: AuthSettings,
    browser: InMemoryBrowserSession,
) -> None:
    respx_mock.post(TOKEN_URL).mock(
        return_value=httpx.Response(401, json={"error": "invalid_client"})
    )

    with pytest.raises(TokenRequestError):
        await _seeder(settings, browser).login()

    assert browser.storage.writes == []
    assert browser.navigations == []


@pytest.mark.asyncio
async def test_module_login_reuses_supplied_http_client(
    respx_mock: respx.Router,
    settings: AuthSettings,
    token_body: dict[str, object],
    browser: InMemoryBrowserSession,
) -> None:
    route = respx_mock.post(TOKEN_URL).mock(
        return_value=httpx.Response(200, json=token_body)
    )

    async with httpx.AsyncClient() as http_client:
        first = await login(settings, browser, http_client=http_client)
        second = await login(settings, browser, first, http_client=http_client)

    assert route.call_count == 1
    assert second is first
    assert browser.navigations == ["/", "/"]
    assert len(browser.storage.writes) == 3


def test_seeder_exposes_settings(settings: AuthSettings) -> None:
    seeder = SessionSeeder(
        settings, InMemoryBrowserSession(), token_client=PasswordGrantClient()
    )

    assert seeder.settings is settings


@pytest.mark.asyncio
async def test_login_through_playwright_page_opens_origin_seeds_then_loads_root(
    respx_mock: respx.Router,
    settings: AuthSettings,
    token_body: dict[str, object],
) -> None:
    respx_mock.post(TOKEN_URL).mock(return_value=httpx.Response(200, json=token_body))
    page = FakePage()
    browser = PlaywrightBrowserSession(page, BASE_URL)

    await SessionSeeder(settings, browser, clock=lambda: NOW).login()

    assert [(kind, detail) for kind, detail in page.events if kind == "goto"] == [
        ("goto", BASE_URL),
        ("goto", BASE_URL + "/"),
    ]
    kinds = [
        "setItem" if kind == "evaluate" and "setItem" in detail else detail
        for kind, detail in page.events
    ]
    assert kinds == [BASE_URL, "setItem", "setItem", "setItem", BASE_URL + "/"]
    assert len(page.session_storage) == 3
    assert page.url == BASE_URL + "/"
