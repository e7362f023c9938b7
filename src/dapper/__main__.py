#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/__main__.py
"""Entry point for ``python -m dapper``."""

import sys

from dapper.cli import main

if __name__ == "__main__":
    sys.exit(main())
