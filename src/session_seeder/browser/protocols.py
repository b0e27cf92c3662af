"""Interfaces for the browser capabilities the seeder needs."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SessionStore(Protocol):
    """Async view of a tab's ``window.sessionStorage``."""

    async def set_item(self, key: str, value: str) -> None: ...

    async def get_item(self, key: str) -> str | None: ...

    async def keys(self) -> list[str]: ...

    async def clear(self) -> None: ...


@runtime_checkable
class BrowserSession(Protocol):
    """A browser tab that can be navigated and exposes session storage."""

    @property
    def session_storage(self) -> SessionStore: ...

    async def navigate(self, path: str) -> None: ...


__all__ = ["BrowserSession", "SessionStore"]
