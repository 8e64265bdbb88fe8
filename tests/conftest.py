# ABOUTME: Shared test fixtures for the UV tracker test suite.
# ABOUTME: Provides in-memory storage, a pinned clock, and a loaded tracker.

from datetime import datetime

import pytest

from src.deps import TrackerDeps
from src.persistence import MemoryStorage, PersistenceGateway
from src.session import SessionTimer
from src.tracker import UvTracker

# Mid-June at 1pm: full seasonal boost, forecast labels start at "1pm"
FIXED_NOW = datetime(2025, 6, 15, 13, 0)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def deps(storage) -> TrackerDeps:
    # Long interval so only explicit tick() calls advance the timer
    return TrackerDeps(gateway=PersistenceGateway(storage), timer=SessionTimer(interval=3600))


@pytest.fixture
def tracker(deps) -> UvTracker:
    tracker = UvTracker(deps, clock=lambda: FIXED_NOW)
    tracker.load()
    return tracker
