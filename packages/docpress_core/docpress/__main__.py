"""
Entry point for running docpress as a module.

Usage:
    python -m docpress convert notes.txt --output notes.pdf
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
