"""Allow ``python -m offset_border``."""

from offset_border.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
