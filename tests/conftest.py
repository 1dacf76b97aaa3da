"""
Pytest configuration for req_validator tests.
"""

import sys
from pathlib import Path

# Ensure the src directory is importable without an install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
