"""Main entry point for running implicalc_pkg as a module.

This allows running implicalc with:
    python -m implicalc_pkg
    python -m implicalc_pkg --hint si
    python -m implicalc_pkg --split "2sin(x)cos(x)"
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
