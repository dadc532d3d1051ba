"""`python -m casper …` forwards to the CLI in `casper.cli`."""

from __future__ import annotations

from casper.cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
