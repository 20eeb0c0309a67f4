import pytest
from datetime import datetime, timedelta, timezone
from sqlalchemy.exc import OperationalError

from resume_scan.core.exceptions import StorageError
from resume_scan.models.resume import Resume
from resume_scan.repositories.resume_repository import ResumeRepository
from resume_scan.schemas.resume import ResumeCreate


def _data(**overrides):
    data = dict(
        file_name="resume-1-1.pdf",
        original_name="cv.pdf",
        file_size=1234,
        file_type="application/pdf",
        candidate_name=None,
        position=None,
        file_path="/tmp/uploads/resume-1-1.pdf",
    )
    data.update(overrides)
    return ResumeCreate(**data)

def _add(db_session, minutes_ago, **fields):
    """Insert a row with a controlled upload time."""
    resume = Resume(
        file_name=fields.pop("file_name", f"resume-{minutes_ago}.pdf"),
        original_name=fields.pop("original_name", "cv.pdf"),
        file_size=10,
        file_type="application/pdf",
        file_path=f"/tmp/resume-{minutes_ago}.pdf",
        uploaded_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
        **fields,
    )
    db_session.add(resume)
    db_session.commit()
    return resume


def test_create_assigns_id_and_upload_time(repository):
    before = datetime.now(timezone.utc).replace(tzinfo=None)
    resume = repository.create(_data(candidate_name="Jane Roe"))

    assert resume.id and len(resume.id) == 36
    assert resume.candidate_name == "Jane Roe"
    uploaded_at = resume.uploaded_at.replace(tzinfo=None)
    assert before - timedelta(seconds=1) <= uploaded_at <= datetime.now(timezone.utc).replace(tzinfo=None)

def test_get(repository):
    created = repository.create(_data())
    assert repository.get(created.id).id == created.id
    assert repository.get("does-not-exist") is None

def test_list_all_newest_first(repository, db_session):
    old = _add(db_session, 30)
    new = _add(db_session, 1)
    middle = _add(db_session, 10)

    assert [r.id for r in repository.list_all()] == [new.id, middle.id, old.id]

def test_delete_and_idempotence(repository):
    created = repository.create(_data())
    repository.delete(created.id)
    assert repository.get(created.id) is None
    # Unknown id is a no-op at this layer
    repository.delete(created.id)

def test_search_matches_any_field_case_insensitively(repository, db_session):
    by_candidate = _add(db_session, 5, candidate_name="JOHN Smith")
    by_position = _add(db_session, 3, position="Johnson & Co liaison")
    by_filename = _add(db_session, 1, original_name="cv_john.pdf")
    _add(db_session, 2, candidate_name="Alice", position="Engineer", original_name="alice.pdf")
    _add(db_session, 4)  # nulls everywhere

    results = repository.search("john")
    assert [r.id for r in results] == [by_filename.id, by_position.id, by_candidate.id]

def test_search_treats_wildcards_literally(repository, db_session):
    literal = _add(db_session, 2, original_name="100%_final.pdf")
    _add(db_session, 1, original_name="100 final.pdf")

    assert [r.id for r in repository.search("100%_")] == [literal.id]
    assert repository.search("%") == [literal]

def test_search_no_match(repository, db_session):
    _add(db_session, 1, candidate_name="Alice")
    assert repository.search("zzz") == []

def test_list_file_names(repository):
    repository.create(_data(file_name="resume-a.pdf"))
    repository.create(_data(file_name="resume-b.pdf"))
    assert repository.list_file_names() == {"resume-a.pdf", "resume-b.pdf"}


class BrokenSession:
    """Stands in for a session whose database has gone away."""

    def __init__(self):
        self.rolled_back = False

    def _fail(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    get = query = add = commit = refresh = _fail

    def rollback(self):
        self.rolled_back = True


def test_database_errors_become_storage_errors():
    session = BrokenSession()
    repo = ResumeRepository(session)

    with pytest.raises(StorageError) as exc_info:
        repo.list_all()
    assert "connection refused" in exc_info.value.message
    assert session.rolled_back

    with pytest.raises(StorageError):
        repo.create(_data())
    with pytest.raises(StorageError):
        repo.get("x")
