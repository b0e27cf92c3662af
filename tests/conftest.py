from __future__ import annotations

import pytest

from session_seeder.browser.memory import InMemoryBrowserSession
from session_seeder.config.settings import AuthSettings
from session_seeder.utils import LoggingOptions, configure_logging
from tests.factories import make_settings, make_token_body


@pytest.fixture(scope="session", autouse=True)
def _quiet_logging() -> None:
    """Log to stderr only so test runs do not write to the user cache dir."""

    configure_logging(LoggingOptions(level="DEBUG", file_logging=False))


@pytest.fixture
def settings() -> AuthSettings:
    return make_settings()


@pytest.fixture
def token_body() -> dict[str, object]:
    return make_token_body()


@pytest.fixture
def browser() -> InMemoryBrowserSession:
    return InMemoryBrowserSession()
