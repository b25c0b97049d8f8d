"""Allow `python -m gitsearch`."""

import sys

from gitsearch.cli import main

if __name__ == "__main__":
    sys.exit(main())
