"""Pytest configuration - consistent CWD and shared surface fixtures."""
from __future__ import annotations

import os
from pathlib import Path

import pytest

from xapdesk.model.channel import ChannelAddress, ChannelDescriptor
from xapdesk.sync.channel_state import SurfaceState

from tests.helpers.fakes import DeferredRunner, FakeBridge, ImmediateRunner

ROOT = Path(__file__).resolve().parents[1]


def pytest_sessionstart(session):
    os.chdir(ROOT)


@pytest.fixture
def project_root():
    """Return path to project root."""
    return ROOT


@pytest.fixture
def descriptors():
    """Two inputs and one output, as the engine would list them."""
    return [
        ChannelDescriptor(ChannelAddress('I', 1), label="Kick", gain=0, muted=False),
        ChannelDescriptor(ChannelAddress('I', 2), label="", gain=-12, muted=True),
        ChannelDescriptor(ChannelAddress('O', 1), label="Main", gain=3, muted=False),
    ]


@pytest.fixture
def surface(descriptors):
    return SurfaceState(descriptors)


@pytest.fixture
def bridge():
    return FakeBridge()


@pytest.fixture
def deferred():
    return DeferredRunner()


@pytest.fixture
def immediate():
    return ImmediateRunner()
