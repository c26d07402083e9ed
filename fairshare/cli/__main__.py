"""
fairshare CLI entry point.

Usage:
    python -m fairshare.cli rank tree.json
    python -m fairshare.cli stats tree.json
"""

import sys
from .main import main

if __name__ == "__main__":
    sys.exit(main())
