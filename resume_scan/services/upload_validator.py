from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from resume_scan.core.config import settings

MAX_TEXT_FIELD_LENGTH = 255


class RejectReason(str, Enum):
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    EMPTY_FILE = "EMPTY_FILE"
    INVALID_METADATA = "INVALID_METADATA"


@dataclass(frozen=True)
class UploadDecision:
    accepted: bool
    reason: Optional[RejectReason] = None
    message: str = ""

    @classmethod
    def accept(cls) -> "UploadDecision":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: RejectReason, message: str) -> "UploadDecision":
        return cls(accepted=False, reason=reason, message=message)


def normalize_mime(file_type: Optional[str]) -> str:
    """'Application/PDF; charset=binary' -> 'application/pdf'"""
    if not file_type:
        return ""
    return file_type.split(";", 1)[0].strip().lower()


def validate_upload(
    file_type: Optional[str],
    file_size: int,
    original_name: Optional[str] = None,
    candidate_name: Optional[str] = None,
    position: Optional[str] = None,
    max_file_size: Optional[int] = None,
    allowed_types: Optional[Iterable[str]] = None,
) -> UploadDecision:
    """
    Decide whether an upload may be stored. Pure: never raises, no side effects.

    Checks run in order: metadata shape, MIME type, emptiness, size.
    """
    if max_file_size is None:
        max_file_size = settings.max_file_size
    allowed = {t.lower() for t in (allowed_types or settings.allowed_file_types)}

    if not original_name or not original_name.strip():
        return UploadDecision.reject(RejectReason.INVALID_METADATA, "Uploaded file has no filename")
    for field, value in (("candidateName", candidate_name), ("position", position)):
        if value is not None and len(value) > MAX_TEXT_FIELD_LENGTH:
            return UploadDecision.reject(
                RejectReason.INVALID_METADATA,
                f"{field} must be at most {MAX_TEXT_FIELD_LENGTH} characters",
            )

    if normalize_mime(file_type) not in allowed:
        return UploadDecision.reject(
            RejectReason.INVALID_FILE_TYPE, "Only PDF, DOC, and DOCX files are allowed"
        )

    if file_size <= 0:
        return UploadDecision.reject(RejectReason.EMPTY_FILE, "Uploaded file is empty")

    if file_size > max_file_size:
        limit_mb = max_file_size / (1024 * 1024)
        return UploadDecision.reject(
            RejectReason.FILE_TOO_LARGE, f"File exceeds the {limit_mb:g}MB size limit"
        )

    return UploadDecision.accept()
