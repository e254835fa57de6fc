"""Module entrypoint for running loctext as ``python -m loctext``."""

from __future__ import annotations

from loctext.cli import main


if __name__ == "__main__":
    main()
