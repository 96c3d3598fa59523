"""Pytest configuration for picostruct tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def schema_file(tmp_path):
    """Write schema configuration text to a temporary file and return its path."""

    def write(text: str, suffix: str = ".yaml") -> Path:
        path = tmp_path / f"schema{suffix}"
        path.write_text(text)
        return path

    return write
