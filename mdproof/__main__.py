"""
Entry point for running mdproof as a module.

Usage:
    python -m mdproof README.md --output README.pdf
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
