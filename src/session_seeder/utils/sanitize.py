from __future__ import annotations

from typing import Final

_CONTROL_CHARS: Final[frozenset[str]] = frozenset(
    chr(code) for code in range(0x00, 0x20) if chr(code) not in {"\t", "\n"}
)

MASK: Final[str] = "***"


def sanitize_log_message(value: str) -> str:
    """Normalise log messages by stripping control characters and CR sequences."""

    normalised = value.replace("\r\n", "\n").replace("\r", "\n")
    return "".join(ch for ch in normalised if ch not in _CONTROL_CHARS)


def mask_secret(value: str | None) -> str | None:
    """Replace a non-empty secret with a fixed mask."""

    if not value:
        return value
    return MASK


def mask_username(value: str | None) -> str | None:
    """Keep the first character and the domain of a sign-in name."""

    if not value:
        return value
    local, sep, domain = value.partition("@")
    return f"{local[:1]}{MASK}{sep}{domain}"


__all__ = ["MASK", "mask_secret", "mask_username", "sanitize_log_message"]
