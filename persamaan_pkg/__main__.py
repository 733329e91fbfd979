"""Main entry point for running persamaan_pkg as a module.

This allows running Persamaan with:
    python -m persamaan_pkg -e "x^2 - 5x + 6 = 0"
    python -m persamaan_pkg -e "x + y = 3, x - y = 1" --find x,y
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
