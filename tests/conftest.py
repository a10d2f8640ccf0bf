"""
Test configuration: puts the repo root on sys.path and provides shared fixtures.

No test touches the network: the analysis collaborator is replaced by
tests.fakes.ScriptedTransport and backoff sleeps are recorded instead of slept.
"""

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from tests.fakes import FAKE_PNG, SleepRecorder  # noqa: E402


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def fake_png():
    return FAKE_PNG
