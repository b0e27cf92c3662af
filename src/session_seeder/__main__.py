"""Entry point for ``python -m session_seeder``."""

from __future__ import annotations

from session_seeder.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
