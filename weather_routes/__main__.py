"""Entry point for ``python -m weather_routes``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
