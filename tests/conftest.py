import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from feedback_core import Settings  # noqa: E402


class FixedLength:
    """Stands in for random.Random; always picks the same suggestion count."""

    def __init__(self, value):
        self.value = value

    def randint(self, low, high):
        return self.value


class FakeProvider:
    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    def request_feedback(self, text, language):
        self.calls.append((text, language))
        return self.reply


class FailingProvider:
    def __init__(self, error):
        self.error = error
        self.calls = 0

    def request_feedback(self, text, language):
        self.calls += 1
        raise self.error


@pytest.fixture
def settings():
    return Settings(demo_delay_min=0, demo_delay_max=0)
