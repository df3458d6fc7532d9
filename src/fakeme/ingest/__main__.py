"""Entry point for ``python -m fakeme.ingest``."""

import sys

from fakeme.ingest.cli import main

if __name__ == "__main__":
    sys.exit(main())
