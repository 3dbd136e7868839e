import base64
import os
from datetime import datetime, timedelta, timezone

TEST_DB_FILE = "test_assignments.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# must be set before the app modules read their configuration
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ["USERS_CSV_PATH"] = "./does-not-exist.csv"
os.environ["LOG_FILE"] = ""
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["HEALTH_CHECK_TTL_SECONDS"] = "0"
os.environ.pop("SNS_TOPIC_ARN", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from assignments_api.core.deps import get_db
from assignments_api.core.health import health_monitor, ping_database
from assignments_api.core.security import hash_password
from assignments_api.db.base import Base
from assignments_api.main import app
from assignments_api.models.assignment import Assignment
from assignments_api.models.submission import Submission
from assignments_api.models.user import User
from assignments_api.services.notifications import get_notifier

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

OWNER_EMAIL = "owner@example.com"
OTHER_EMAIL = "other@example.com"
PASSWORD = "password123"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def basic_auth(email: str, password: str = PASSWORD) -> dict:
    token = base64.b64encode(f"{email}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


class RecordingNotifier:
    def __init__(self):
        self.published = []

    def publish(self, email, submission_url, assignment_id, attempt):
        self.published.append(
            {
                "email": email,
                "url": submission_url,
                "assignment_id": assignment_id,
                "attempt": attempt,
            }
        )


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def healthy_database():
    """Every test starts with the real ping against the test database."""
    health_monitor.ping = ping_database
    health_monitor.invalidate()
    yield
    health_monitor.ping = ping_database
    health_monitor.invalidate()


@pytest.fixture(autouse=True)
def seed_data():
    """Seed a clean minimal dataset for each test."""
    db = TestingSessionLocal()
    try:
        # Clear tables (child -> parent)
        db.query(Submission).delete()
        db.query(Assignment).delete()
        db.query(User).delete()
        db.commit()

        owner = User(
            first_name="Owner",
            last_name="One",
            email=OWNER_EMAIL,
            password=hash_password(PASSWORD),
        )
        other = User(
            first_name="Other",
            last_name="Two",
            email=OTHER_EMAIL,
            password=hash_password(PASSWORD),
        )
        db.add_all([owner, other])
        db.commit()
        db.refresh(owner)
        db.refresh(other)

        # Assignment (future deadline so submissions allowed)
        assignment = Assignment(
            user_id=owner.id,
            name="HW1",
            points=5,
            num_of_attempts=3,
            deadline=datetime.now(timezone.utc) + timedelta(days=1),
        )
        db.add(assignment)
        db.commit()
        db.refresh(assignment)

        yield {
            "owner_id": owner.id,
            "other_id": other.id,
            "assignment_id": assignment.id,
        }
    finally:
        db.close()


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def client(notifier):
    """Test client that uses the test DB session and a recording notifier."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
