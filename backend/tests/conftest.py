"""
Pytest configuration and fixtures
"""
import pytest
from fastapi.testclient import TestClient

from hunt.core.config import Settings
from hunt.main import create_app
from hunt.services.submission_store import SubmissionStore

ADMIN_SECRET = "let-me-in"


@pytest.fixture
def settings(tmp_path):
    """Roster 1..6, answer "javascript", backed by a throwaway SQLite file"""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'hunt.db'}",
        answer="javascript",
        admin_secret=ADMIN_SECRET,
        team_ids=[1, 2, 3, 4, 5, 6],
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    yield app
    app.state.engine.dispose()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_headers():
    return {"x-admin-secret": ADMIN_SECRET}


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db):
    return SubmissionStore(db)
