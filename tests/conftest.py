# tests/conftest.py
import os
import sys

import pytest

# Add the project root to the path so the flat modules import
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


@pytest.fixture
def fake_clock():
    """A settable clock for driving TypingSession without sleeping."""

    class FakeClock:
        def __init__(self):
            self.now = 1000.0

        def __call__(self):
            return self.now

        def advance(self, seconds):
            self.now += seconds

    return FakeClock()
