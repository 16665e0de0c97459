"""Module entrypoint for running envcfg as ``python -m envcfg``."""

from __future__ import annotations

from envcfg.cli import main


if __name__ == "__main__":
    main()
