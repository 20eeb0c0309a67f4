import logging
import time
from typing import Iterable, List, Optional

from resume_scan.core.config import settings
from resume_scan.core.exceptions import NotFoundError, StorageError, ValidationError
from resume_scan.models.resume import Resume
from resume_scan.repositories.resume_repository import ResumeRepository
from resume_scan.schemas.resume import ResumeCreate
from resume_scan.services.file_store import STORAGE_PREFIX, FileStore
from resume_scan.services.upload_validator import normalize_mime, validate_upload

logger = logging.getLogger(__name__)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class ResumeService:
    """
    Resume record lifecycle across the file store and the record store.

    Neither upload nor delete is transactional across the two stores:
    - upload saves the file first; if the insert fails the file is left behind
      and only `sweep_orphans` will remove it.
    - delete removes the file first; if the row delete then fails the record
      stays and points at a missing file.
    """

    def __init__(
        self,
        repository: ResumeRepository,
        file_store: FileStore,
        max_file_size: Optional[int] = None,
        allowed_types: Optional[Iterable[str]] = None,
    ):
        self.repository = repository
        self.file_store = file_store
        self.max_file_size = max_file_size if max_file_size is not None else settings.max_file_size
        self.allowed_types = list(allowed_types or settings.allowed_file_types)

    def upload(
        self,
        content: bytes,
        original_name: Optional[str],
        file_type: Optional[str],
        candidate_name: Optional[str] = None,
        position: Optional[str] = None,
    ) -> Resume:
        candidate_name = _blank_to_none(candidate_name)
        position = _blank_to_none(position)

        decision = validate_upload(
            file_type,
            len(content),
            original_name=original_name,
            candidate_name=candidate_name,
            position=position,
            max_file_size=self.max_file_size,
            allowed_types=self.allowed_types,
        )
        if not decision.accepted:
            logger.warning(
                f"Upload rejected: {decision.message}",
                extra={"reason": decision.reason.value, "original_name": original_name},
            )
            raise ValidationError(decision.message, reason=decision.reason.value)

        file_type = normalize_mime(file_type)
        stored_path = self.file_store.save(content, original_name, file_type)
        resume = self.repository.create(
            ResumeCreate(
                file_name=stored_path.name,
                original_name=original_name,
                file_size=len(content),
                file_type=file_type,
                candidate_name=candidate_name,
                position=position,
                file_path=str(stored_path),
            )
        )
        logger.info(f"Resume uploaded: {resume.id} ({resume.original_name})")
        return resume

    def get(self, resume_id: str) -> Resume:
        resume = self.repository.get(resume_id)
        if resume is None:
            raise NotFoundError("Resume not found")
        return resume

    def list_all(self) -> List[Resume]:
        return self.repository.list_all()

    def search(self, query: str) -> List[Resume]:
        return self.repository.search(query)

    def delete(self, resume_id: str) -> None:
        resume = self.get(resume_id)
        try:
            self.file_store.delete(resume.file_path)
        except StorageError as e:
            # The row is removed regardless; the file may linger until the next sweep
            logger.error(f"Could not remove file for resume {resume_id}: {e.message}")
        self.repository.delete(resume_id)
        logger.info(f"Resume deleted: {resume_id}")

    def sweep_orphans(self, min_age_seconds: Optional[int] = None) -> List[str]:
        """
        Remove generated storage files that no record references.
        Files not named `resume-...` were not written here and are left alone.

        Files younger than `min_age_seconds` are skipped so an upload whose
        record is still being inserted is never touched.
        """
        if min_age_seconds is None:
            min_age_seconds = settings.orphan_min_age_seconds
        referenced = self.repository.list_file_names()
        cutoff = time.time() - min_age_seconds
        removed: List[str] = []

        for path in self.file_store.list_files():
            if not path.name.startswith(f"{STORAGE_PREFIX}-") or path.name in referenced:
                continue
            try:
                if path.stat().st_mtime > cutoff:
                    continue
                self.file_store.delete(path)
            except FileNotFoundError:
                continue
            except StorageError as e:
                logger.error(f"Sweep could not remove {path.name}: {e.message}")
                continue
            removed.append(path.name)

        logger.info(f"Orphan sweep removed {len(removed)} file(s)", extra={"removed": removed})
        return removed
