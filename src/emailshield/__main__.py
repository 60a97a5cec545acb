"""Module entry: python -m emailshield."""

from emailshield.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
