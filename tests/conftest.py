import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock
import os
import sys

# Add the project root to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from tenant_admin.main import app
from tenant_admin.api import deps
from tenant_admin.core.config import Settings
from tenant_admin.repositories.organization import OrganizationRepository
from tests.fixtures.firestore import FakeFirestore


@pytest.fixture
def fake_db():
    """Empty in-memory Firestore"""
    return FakeFirestore()


@pytest.fixture
def sample_db(fake_db):
    """
    Two organizations: org1 has u1 and u3 without is_active and u2 with
    is_active=false; org2 has u4 without is_active.
    """
    fake_db.add_organization("org1", {
        "u1": {"email": "u1@example.com"},
        "u2": {"email": "u2@example.com", "is_active": False, "updated_at": "2024-01-01T00:00:00Z"},
        "u3": {"email": "u3@example.com"},
    })
    fake_db.add_organization("org2", {
        "u4": {"email": "u4@example.com"},
    })
    return fake_db


@pytest.fixture
def test_settings():
    return Settings(firestore_page_size=1000, migration_batch_size=500)


@pytest.fixture
def repository(sample_db, test_settings):
    return OrganizationRepository(sample_db, test_settings)


@pytest.fixture
def caller():
    return {"uid": "admin-uid", "email": "admin@example.com", "token": {}}


@pytest.fixture
def client(repository):
    """Test client wired to the in-memory store, no caller identity"""
    app.dependency_overrides[deps.get_repository_factory] = lambda: (lambda: repository)
    app.dependency_overrides[deps.get_caller] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client, caller):
    """Test client with an authenticated caller"""
    app.dependency_overrides[deps.get_caller] = lambda: caller
    return client


@pytest.fixture
def mock_ses():
    ses = MagicMock()
    ses.send_email.return_value = {"MessageId": "msg-123"}
    return ses
