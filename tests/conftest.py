"""
Shared test fixtures: test client, engine settings, sample lumber.
"""

import pytest
from fastapi.testclient import TestClient

from lumbersuite.config import get_settings
from lumbersuite.main import app
from lumbersuite.schemas import Dimensions, EngineSettings


@pytest.fixture(autouse=True)
def clear_overrides():
    """Each test starts with the real settings dependency."""
    yield
    app.dependency_overrides.pop(get_settings, None)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def engine_settings():
    """Default engine settings snapshot (BF precision 4, 95% yield)."""
    return EngineSettings()


@pytest.fixture
def two_by_six():
    """2" × 6" × 10', exactly 10 BF per piece."""
    return Dimensions(thickness=2, width=6, length=10)
