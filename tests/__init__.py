"""
Test suite for the templatequill project.

This module contains all tests for the templatequill package.
"""

import sys
from pathlib import Path

# Add the package root to the Python path
package_root = Path(__file__).parent.parent / "packages" / "templatequill_core"
sys.path.insert(0, str(package_root))
