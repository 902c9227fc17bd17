"""Global pytest configuration for all tests."""

import os
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent

# Make the artlink package and the tests.fixtures modules importable without install
for path in (ROOT_DIR / "lib", ROOT_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


def pytest_configure(config):
    """Set environment variables before any test collection or execution."""
    os.environ.setdefault("ARTLINK_BASE_URL", "https://shop.example.com/apps/verisart")
    os.environ.setdefault("ARTLINK_SIMULATE_DEVICE", "1")
