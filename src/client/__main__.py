"""Daybook client entry point

Usage:
    python -m src.client <command> [options]
"""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
