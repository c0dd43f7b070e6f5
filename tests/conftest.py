"""
Pytest configuration.
Puts the project root (app, domain, repositories, services) and this
directory (test_fixtures) on sys.path so tests run without installing.
"""

import sys
from pathlib import Path

tests_dir = Path(__file__).parent
for path in (tests_dir.parent, tests_dir):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
