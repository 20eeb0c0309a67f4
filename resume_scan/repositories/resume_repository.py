"""
Resume record store.

Wraps the `resumes` table. The SQLAlchemy session is injected by the caller
(a FastAPI dependency in the API, a plain session in scripts and tests).
"""
import logging
from typing import List, Optional, Set

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from resume_scan.core.exceptions import StorageError
from resume_scan.models.resume import Resume
from resume_scan.schemas.resume import ResumeCreate

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def _like_pattern(query: str) -> str:
    """Lowercased '%query%' with LIKE wildcards escaped so they match literally."""
    escaped = (
        query.lower()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class ResumeRepository:
    def __init__(self, session: Session):
        self.session = session

    def _fail(self, action: str, error: SQLAlchemyError) -> StorageError:
        self.session.rollback()
        logger.error(f"Database error while trying to {action}: {error}", exc_info=True)
        return StorageError(f"Database failure while trying to {action}: {error}")

    def create(self, data: ResumeCreate) -> Resume:
        """Insert a row; id and uploaded_at are assigned here."""
        resume = Resume(**data.model_dump())
        try:
            self.session.add(resume)
            self.session.commit()
            self.session.refresh(resume)
        except SQLAlchemyError as e:
            raise self._fail("insert resume", e) from e
        return resume

    def get(self, resume_id: str) -> Optional[Resume]:
        try:
            return self.session.get(Resume, resume_id)
        except SQLAlchemyError as e:
            raise self._fail("fetch resume", e) from e

    def list_all(self) -> List[Resume]:
        try:
            return (
                self.session.query(Resume)
                .order_by(Resume.uploaded_at.desc())
                .all()
            )
        except SQLAlchemyError as e:
            raise self._fail("list resumes", e) from e

    def delete(self, resume_id: str) -> None:
        """Idempotent: deleting an unknown id does nothing."""
        try:
            self.session.query(Resume).filter(Resume.id == resume_id).delete()
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete resume", e) from e

    def search(self, query: str) -> List[Resume]:
        """Case-insensitive substring match on original name, candidate name or position."""
        pattern = _like_pattern(query)
        try:
            return (
                self.session.query(Resume)
                .filter(
                    or_(
                        func.lower(Resume.original_name).like(pattern, escape=LIKE_ESCAPE),
                        func.lower(func.coalesce(Resume.candidate_name, "")).like(pattern, escape=LIKE_ESCAPE),
                        func.lower(func.coalesce(Resume.position, "")).like(pattern, escape=LIKE_ESCAPE),
                    )
                )
                .order_by(Resume.uploaded_at.desc())
                .all()
            )
        except SQLAlchemyError as e:
            raise self._fail("search resumes", e) from e

    def list_file_names(self) -> Set[str]:
        try:
            return {row[0] for row in self.session.query(Resume.file_name).all()}
        except SQLAlchemyError as e:
            raise self._fail("list stored file names", e) from e
