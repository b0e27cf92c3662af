from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class InMemorySessionStore:
    """Dictionary-backed session storage that records every write."""

    items: dict[str, str] = field(default_factory=dict)
    writes: list[tuple[str, str]] = field(default_factory=list)

    async def set_item(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.items[key] = value

    async def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    async def keys(self) -> list[str]:
        return list(self.items)

    async def clear(self) -> None:
        self.items.clear()


@dataclass(slots=True)
class InMemoryBrowserSession:
    """Browser stand-in for tests and previews; navigation is only recorded."""

    storage: InMemorySessionStore = field(default_factory=InMemorySessionStore)
    navigations: list[str] = field(default_factory=list)

    @property
    def session_storage(self) -> InMemorySessionStore:
        return self.storage

    async def navigate(self, path: str) -> None:
        self.navigations.append(path)


__all__ = ["InMemoryBrowserSession", "InMemorySessionStore"]
