"""Shared fixtures for nmwatch tests."""

import pytest

from nmwatch.watcher import ConnectivityWatcher, RawState

from tests.fakes import FakeTransport


@pytest.fixture
def transport():
    return FakeTransport(state=RawState.DISCONNECTED)


@pytest.fixture
def watcher(transport):
    return ConnectivityWatcher(transport)
