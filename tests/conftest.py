"""Test configuration and fixtures."""

import os
from datetime import datetime
from unittest.mock import Mock

import pytest

# Set test environment variables BEFORE importing the app
os.environ["GROQ_API_KEY"] = "test-groq-key"
os.environ["LINE_CHANNEL_SECRET"] = "test-channel-secret"
os.environ["LINE_CHANNEL_ACCESS_TOKEN"] = "test-access-token"

from usage_counter import MemoryStore, UsageTracker


class FakeClock:
    """Settable clock so tests can move across day boundaries."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 2, 9, 30))


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def tracker(store, clock):
    return UsageTracker(store, clock=clock)


def make_completion(content):
    """Build an object shaped like an OpenAI chat completion response."""
    message = Mock()
    message.content = content
    choice = Mock()
    choice.message = message
    response = Mock()
    response.choices = [choice]
    return response


@pytest.fixture
def openai_client():
    client = Mock()
    client.chat.completions.create.return_value = make_completion("  Hello there!  ")
    return client
