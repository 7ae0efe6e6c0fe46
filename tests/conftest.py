"""Pytest configuration for the Jsish test suite."""

import sys
from pathlib import Path

# Add src directory to path so the suite runs without an install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
