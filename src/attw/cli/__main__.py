"""Module entrypoint for the attw CLI."""

from __future__ import annotations

from attw.cli.app import main

if __name__ == "__main__":
    main()
