"""Browser abstractions used to seed session storage."""

from .memory import InMemoryBrowserSession, InMemorySessionStore
from .playwright_page import PlaywrightBrowserSession, PlaywrightSessionStore
from .protocols import BrowserSession, SessionStore

__all__ = [
    "BrowserSession",
    "InMemoryBrowserSession",
    "InMemorySessionStore",
    "PlaywrightBrowserSession",
    "PlaywrightSessionStore",
    "SessionStore",
]
