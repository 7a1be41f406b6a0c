"""
Test suite for the docpress project.

This module contains all tests for the docpress package.
"""

import sys
from pathlib import Path

# Make the package importable without installation
package_root = Path(__file__).parent.parent / "packages" / "docpress_core"
sys.path.insert(0, str(package_root))
