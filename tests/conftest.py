"""
Pytest configuration: make sure `import milestones` works regardless of
where pytest is invoked, and provide an in‑memory SQLite engine.

It prepends the project root (one directory above *tests/*) to
``sys.path`` **before** any tests are collected.
"""

import sys
from pathlib import Path

import pytest

# /path/to/project/tests -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from milestones.db import create_all, make_engine  # noqa: E402


@pytest.fixture
def engine():
    """Fresh private in‑memory database with the schema created."""
    eng = make_engine("sqlite://", echo=False)
    create_all(eng)
    yield eng
    eng.dispose()
