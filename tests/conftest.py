"""The conftest.py file serves as a means of providing fixtures for an entire directory.

Fixtures defined in a conftest.py can be used by any test in that package without needing to import them.
"""

import os

os.environ["HLSSTITCH_TESTING"] = "1"  # Before anything reads settings

import pytest
from fastapi.testclient import TestClient

from hlsstitch.core.config import StitchConf
from hlsstitch.instances.stitcher import set_stitch_service
from hlsstitch.main import app
from hlsstitch.services.stitcher import StitchService
from tests.test_utils.source import FakeByteSource, FakeClock


@pytest.fixture
def stitch_conf() -> StitchConf:
    return StitchConf()


@pytest.fixture
def fake_source() -> FakeByteSource:
    return FakeByteSource()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def stitch_service(stitch_conf: StitchConf, fake_source: FakeByteSource, fake_clock: FakeClock) -> StitchService:
    """A StitchService on fake upstreams, also set as the app's instance."""
    service = StitchService(conf=stitch_conf, fetcher=fake_source, clock=fake_clock, instance_id="pytest")
    set_stitch_service(service)
    return service


@pytest.fixture
def client(stitch_service: StitchService) -> TestClient:
    """Test client without the lifespan, so the fake stitch_service stays in place."""
    return TestClient(app)
