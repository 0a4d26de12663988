"""
Test configuration and fixtures for sharedrand tests.
"""

import threading

import pytest

from sharedrand.config import SourceConfig
from sharedrand.source import SharedSource


class CountingEntropy:
    """Entropy callable that counts how often it is asked for a seed."""

    def __init__(self):
        self._lock = threading.Lock()
        self.draws = 0

    def __call__(self):
        with self._lock:
            self.draws += 1
            return 0x9E3779B97F4A7C15 ^ self.draws


@pytest.fixture
def entropy():
    """Counting entropy source."""
    return CountingEntropy()


@pytest.fixture
def source(entropy):
    """Standalone source with the default threshold and counting entropy."""
    return SharedSource(entropy=entropy)


@pytest.fixture
def low_threshold_source(entropy):
    """Source that re-seeds after only a handful of charged units."""
    return SharedSource(SourceConfig(reseed_threshold=10), entropy=entropy)


@pytest.fixture
def n_trials():
    """Repetitions for statistical range checks."""
    return 2000
