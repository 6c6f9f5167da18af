import os
import sys

import pytest

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from core import BackoffPolicy  # noqa: E402
from fakes import FakeCompletionClient, RecordingBackoff  # noqa: E402


@pytest.fixture
def events():
    """Shared event log for clients and backoff policies."""
    return []


@pytest.fixture
def backoff(events):
    return RecordingBackoff(events=events)


@pytest.fixture
def no_delay():
    return BackoffPolicy.none()


@pytest.fixture
def echo_client(events):
    """Client answering section prompts with 'summary-of-chunk-{ordinal}'."""
    return FakeCompletionClient(events=events)
