"""Command line entry point.

``python -m session_seeder preview --settings authsettings.json`` performs the
password grant and prints the session storage entries that ``login`` would
write, which helps when a seeded app does not recognise the session.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Sequence

from session_seeder.auth.token_client import PasswordGrantClient
from session_seeder.auth.types import TokenResponse
from session_seeder.browser.memory import InMemorySessionStore
from session_seeder.cache.injector import inject_tokens
from session_seeder.config.settings import SettingsManager
from session_seeder.errors import ConfigurationError, SeederError
from session_seeder.utils import (
    LoggingOptions,
    configure_logging,
    get_logger,
    mask_secret,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="session-seeder")
    subcommands = parser.add_subparsers(dest="command", required=True)

    preview = subcommands.add_parser(
        "preview", help="print the session storage entries for a test login"
    )
    preview.add_argument("--settings", type=Path, help="JSON auth settings file")
    preview.add_argument("--env-file", type=Path, help="dotenv file with overrides")
    preview.add_argument(
        "--token-response",
        type=Path,
        help="use a saved token endpoint response instead of requesting one",
    )
    preview.add_argument(
        "--show-secrets",
        action="store_true",
        help="include token values in the output",
    )
    preview.add_argument("--debug", action="store_true")
    return parser


def _load_token_response(path: Path) -> TokenResponse:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Unable to read token response {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(f"Token response {path} must be a JSON object")
    try:
        return TokenResponse.from_body(payload)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid token response {path}: {exc}") from exc


async def preview_entries(
    args: argparse.Namespace,
    token_client: PasswordGrantClient | None = None,
) -> dict[str, Any]:
    settings = SettingsManager(args.settings, args.env_file).load()
    if args.token_response is not None:
        token_response = _load_token_response(args.token_response)
    else:
        client = token_client or PasswordGrantClient()
        token_response = await client.acquire(settings)

    store = InMemorySessionStore()
    await inject_tokens(store, token_response, settings)

    entries: dict[str, Any] = {}
    for key in await store.keys():
        value = json.loads(await store.get_item(key) or "{}")
        if not args.show_secrets and "secret" in value:
            value["secret"] = mask_secret(value["secret"])
        entries[key] = value
    return entries


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(LoggingOptions(debug=args.debug, file_logging=False))
    logger = get_logger(__name__)

    try:
        entries = asyncio.run(preview_entries(args))
    except SeederError as exc:
        logger.error(
            "Preview failed",
            error=str(exc),
            category=exc.category.value,
            suggestion=exc.recovery_suggestion,
        )
        return 1

    json.dump(entries, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


__all__ = ["main", "preview_entries"]
