"""
Shared pytest fixtures for distinct_value tests.
"""

import pytest

from tests.utils import Recorder, TrackingSource


@pytest.fixture
def source():
    """Provide a hot, hand-driven upstream observable."""
    return TrackingSource()


@pytest.fixture
def recorder():
    """Provide a fresh listener recorder."""
    return Recorder()
