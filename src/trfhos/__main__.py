"""Allow running as ``python -m trfhos``."""

import sys

from trfhos.cli import main

if __name__ == "__main__":
    sys.exit(main())
