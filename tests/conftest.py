import pytest
import os
import tempfile
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="resume-scan-test-")

from resume_scan.core.config import PDF_TYPE
from resume_scan.database import Base, get_db
from resume_scan.dependencies import get_file_store
from resume_scan.main import app
from resume_scan.repositories.resume_repository import ResumeRepository
from resume_scan.services.file_store import FileStore
from resume_scan.services.resume_service import ResumeService
from fastapi.testclient import TestClient

PDF_BYTES = b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\n%%EOF\n"

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    # Use sessionmaker with the active connection
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="function")
def upload_dir(tmp_path):
    return tmp_path / "uploads"

@pytest.fixture(scope="function")
def file_store(upload_dir):
    return FileStore(upload_dir)

@pytest.fixture(scope="function")
def repository(db_session):
    return ResumeRepository(db_session)

@pytest.fixture(scope="function")
def service(repository, file_store):
    return ResumeService(repository, file_store)

@pytest.fixture(scope="function")
def client(db_session, file_store):
    """Get a TestClient that uses the test database session and upload dir via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_store] = lambda: file_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

@pytest.fixture(scope="function")
def upload(client):
    """Helper fixture posting a multipart upload to the API."""
    def _upload(filename="resume.pdf", content=PDF_BYTES, content_type=PDF_TYPE, **form):
        return client.post(
            "/api/resumes/upload",
            files={"resume": (filename, content, content_type)},
            data=form,
        )
    return _upload
