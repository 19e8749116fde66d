"""
Module execution entry point.

Allows running with: python -m appendtree_cli
"""

import sys
from appendtree_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
