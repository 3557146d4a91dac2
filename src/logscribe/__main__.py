"""Module entry point for ``python -m logscribe``."""

from __future__ import annotations

from .cli import main


if __name__ == "__main__":  # pragma: no cover - standard entry point
    main()
