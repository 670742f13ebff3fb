import os
import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Settings are read at import time, so configure before importing the app
os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = "sqlite:///./test.db"

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402
from app.core.database import Base, SessionLocal, engine, init_db  # noqa: E402
from app.models.doctor import Doctor  # noqa: E402
from app.models.patient import Patient  # noqa: E402

DOCTORS = {
    1: "Dr. Amina Okafor",
    2: "Dr. Lars Nilsen",
}

PATIENTS = {
    1: "Maria Gonzalez",
    2: "Kenji Watanabe",
    3: "Priya Raman",
    4: "Tom Becker",
    5: "Leila Haddad",
    6: "Samuel Mensah",
}

@pytest.fixture(scope="function")
def test_db():
    # Create tables and the read-only reference rows
    init_db()
    db = SessionLocal()
    db.add_all([Doctor(doctor_id=i, name=name) for i, name in DOCTORS.items()])
    db.add_all([Patient(patient_id=i, name=name) for i, name in PATIENTS.items()])
    db.commit()
    db.close()
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def db_session(test_db):
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def client(test_db):
    # Startup runs the seeder against the freshly created tables
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client
