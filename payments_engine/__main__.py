"""Allow ``python -m payments_engine``."""

import sys

from payments_engine.cli import main

if __name__ == "__main__":
    sys.exit(main())
