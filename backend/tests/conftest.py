"""Test configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from coldcall.auth import create_access_token
from coldcall.database import Base, get_db
from coldcall.models import Classroom, Student, Rotation


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite:///:memory:"

TEACHER_ID = "teacher-1"
OTHER_TEACHER_ID = "teacher-2"


@pytest.fixture
def engine():
    """Create a fresh test database for every test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Create test database session."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """Test client with get_db pointed at the test database."""
    from coldcall.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def auth_headers(teacher_id: str = TEACHER_ID) -> dict:
    token = create_access_token({"sub": teacher_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def teacher_headers():
    return auth_headers(TEACHER_ID)


@pytest.fixture
def other_teacher_headers():
    return auth_headers(OTHER_TEACHER_ID)


@pytest.fixture
def sample_class(db_session):
    """Create a sample class for testing."""
    classroom = Classroom(name="Period 3 Biology", teacher_id=TEACHER_ID, rotation=Rotation.A)
    db_session.add(classroom)
    db_session.commit()
    db_session.refresh(classroom)
    return classroom


@pytest.fixture
def sample_students(db_session, sample_class):
    """The three-student roster: Ada and Ben on A, Cy already on B."""
    students = [
        Student(name="Ada", class_id=sample_class.id, exclude=False, rotation=Rotation.A),
        Student(name="Ben", class_id=sample_class.id, exclude=False, rotation=Rotation.A),
        Student(name="Cy", class_id=sample_class.id, exclude=False, rotation=Rotation.B),
    ]
    db_session.add_all(students)
    db_session.commit()
    for student in students:
        db_session.refresh(student)
    return students
