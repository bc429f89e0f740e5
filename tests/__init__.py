"""Test package initialisation for Numeric Entry."""

from pathlib import Path
import sys

# Pytest can change the current directory during collection, which makes
# top-level modules like ``numeric_entry`` inaccessible unless the project
# root is explicitly added to ``sys.path``.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
