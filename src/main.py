"""Standalone script that forwards to :mod:`logscribe.cli`."""

from __future__ import annotations

from logscribe.cli import main

# ╭──────────────────────────────────────────────────────────────╮
# │ Allow ``python src/main.py`` next to the installed command.  │
# ╰──────────────────────────────────────────────────────────────╯


if __name__ == "__main__":  # pragma: no cover - script entry point
    main()
