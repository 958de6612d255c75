"""
Cargoship Test Configuration and Fixtures

Each test gets its own serial allocator so serial numbers are deterministic,
and a hazard recorder so notifications can be asserted without stdout.
"""

import pytest

from cargoship.containers import ContainerFactory, HazardRecorder, SerialAllocator
from cargoship.bootstrap.config import reset_config


@pytest.fixture
def allocator():
    """Fresh serial allocator starting at 1."""
    return SerialAllocator()


@pytest.fixture
def recorder():
    """Hazard sink that keeps notifications."""
    return HazardRecorder()


@pytest.fixture
def factory(allocator, recorder):
    """Container factory wired to the test allocator and recorder."""
    return ContainerFactory(allocator=allocator, hazard_sink=recorder)


@pytest.fixture(autouse=True)
def _clear_cached_config():
    """Keep the global configuration from leaking between tests."""
    reset_config()
    yield
    reset_config()
