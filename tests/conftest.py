"""Shared test fixtures: Flask app and client, provider always mocked."""
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture(autouse=True)
def no_network(monkeypatch):
    """Fail loudly if a test reaches the real provider."""
    def _blocked(*args, **kwargs):
        raise AssertionError('Test attempted a real HTTP request')
    monkeypatch.setattr('urllib.request.urlopen', _blocked)


@pytest.fixture
def app():
    """Flask test app."""
    from app import create_app
    application = create_app()
    application.config['TESTING'] = True
    return application


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def roadmap_request():
    from models.roadmap_request import RoadmapRequest
    return RoadmapRequest(goal='Become a Frontend Developer', weekly_hours=10,
                          total_weeks=4, skills=())
