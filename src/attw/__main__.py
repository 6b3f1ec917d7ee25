"""Run the attw CLI with ``python -m attw``."""

from __future__ import annotations

from attw.cli.app import main

if __name__ == "__main__":
    main()
