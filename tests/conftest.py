"""
Shared fixtures: an in-memory SQLite database wired into the app.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from assessdesk.main import app
from assessdesk.db.base import Base
from assessdesk.db.session import get_db
import assessdesk.db.models  # noqa: F401


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the database dependency
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function", autouse=True)
def setup_db():
    """Create and drop tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    """Create test client (no lifespan, so no demo seeding)."""
    return TestClient(app)


@pytest.fixture
def rubric_payload():
    return {
        "name": "Technical Interview",
        "description": "Technical assessment",
        "categories": [
            {
                "id": "coding",
                "name": "Coding Skills",
                "icon": "code",
                "color": "#2E86AB",
                "criteria": [
                    {"id": "a", "name": "Problem Solving", "maxScore": 10, "weight": 1},
                    {"id": "b", "name": "Code Quality", "maxScore": 10, "weight": 3},
                ],
            }
        ],
    }


@pytest.fixture
def rubric(client, rubric_payload):
    response = client.post("/api/rubrics", json=rubric_payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def candidate(client):
    response = client.post("/api/candidates", json={
        "name": "Sarah Johnson",
        "email": "sarah.johnson@email.com",
        "position": "Frontend Developer",
    })
    assert response.status_code == 201
    return response.json()
