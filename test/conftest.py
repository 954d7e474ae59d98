"""Test configuration ensuring the project package is importable."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
TESTS = ROOT / "test"

for path in (str(ROOT), str(TESTS)):
    if path not in sys.path:
        sys.path.insert(0, path)

from vaa_inspector import known_emitters  # noqa: E402


@pytest.fixture
def restore_registry():
    """Put the shipped registry back after a test swaps it out"""
    original = known_emitters.registry()
    yield original
    known_emitters.replace_registry(original)
