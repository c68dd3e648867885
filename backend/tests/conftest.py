"""
Pytest Configuration & Shared Fixtures

Fixtures reused across the test suite: the FastAPI app, a test client
and the canonical poses from test_helpers.
"""
import pytest
from fastapi.testclient import TestClient

from core.domain import PoseFrame, TrackingSession
from core.services import ShotAnalyzer
from tests.test_helpers import (
    DIP_POSE,
    IDLE_POSE,
    RELEASE_POSE,
    SET_POSE,
    create_landmarks,
    create_pose,
)


# ========================================
# Application Fixtures
# ========================================

@pytest.fixture(scope="session")
def app():
    """FastAPI application instance"""
    from main import app as fastapi_app
    return fastapi_app


@pytest.fixture(scope="session")
def client(app):
    """FastAPI TestClient (API tests)"""
    return TestClient(app)


# ========================================
# Domain Object Fixtures
# ========================================

@pytest.fixture
def set_landmarks():
    """33 landmark dicts for a right-handed set point"""
    return create_landmarks(SET_POSE)


@pytest.fixture
def set_pose() -> PoseFrame:
    """Right-handed set point: elbow 90°, knees 150°"""
    return create_pose(SET_POSE)


@pytest.fixture
def idle_pose() -> PoseFrame:
    """Standing, arms down"""
    return create_pose(IDLE_POSE)


@pytest.fixture
def dip_pose() -> PoseFrame:
    """Knees at 120°, ball below the shoulders"""
    return create_pose(DIP_POSE)


@pytest.fixture
def release_pose() -> PoseFrame:
    """Shooting wrist well above the head, legs straight"""
    return create_pose(RELEASE_POSE)


@pytest.fixture
def session() -> TrackingSession:
    return TrackingSession()


@pytest.fixture
def analyzer() -> ShotAnalyzer:
    """Analyzer without smoothing, so each frame is taken as-is"""
    return ShotAnalyzer(smoothing_alpha=1.0)
