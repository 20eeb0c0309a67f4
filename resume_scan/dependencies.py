"""
Request-scoped providers for the resume stores and service.

Tests override `get_db` and `get_file_store` through
`app.dependency_overrides` to swap in an isolated database and directory.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from resume_scan.core.config import settings
from resume_scan.database import get_db
from resume_scan.repositories.resume_repository import ResumeRepository
from resume_scan.services.file_store import FileStore
from resume_scan.services.resume_service import ResumeService


def get_file_store() -> FileStore:
    return FileStore(settings.upload_dir)


def get_resume_repository(db: Session = Depends(get_db)) -> ResumeRepository:
    return ResumeRepository(db)


def get_resume_service(
    repository: ResumeRepository = Depends(get_resume_repository),
    file_store: FileStore = Depends(get_file_store),
) -> ResumeService:
    return ResumeService(repository, file_store)


__all__ = [
    "get_db",
    "get_file_store",
    "get_resume_repository",
    "get_resume_service",
]
