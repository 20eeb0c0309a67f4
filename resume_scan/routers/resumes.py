from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from typing import List, Optional
import logging

from resume_scan.core.config import settings
from resume_scan.core.exceptions import ValidationError
from resume_scan.core.limiter import limiter
from resume_scan.dependencies import get_resume_service
from resume_scan.schemas.resume import MessageResponse, ResumeResponse
from resume_scan.services.resume_service import ResumeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["Resumes"])


@router.get("", response_model=List[ResumeResponse])
def list_resumes(service: ResumeService = Depends(get_resume_service)):
    """List all resumes, newest first."""
    return service.list_all()


@router.get("/search/{query}", response_model=List[ResumeResponse])
def search_resumes(query: str, service: ResumeService = Depends(get_resume_service)):
    """
    Case-insensitive substring search over original filename,
    candidate name and position.
    """
    return service.search(query)


@router.get("/{resume_id}", response_model=ResumeResponse)
def get_resume(resume_id: str, service: ResumeService = Depends(get_resume_service)):
    return service.get(resume_id)


@router.post("/upload", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.upload_rate_limit)
def upload_resume(
    request: Request,
    resume: Optional[UploadFile] = File(None),
    candidate_name: Optional[str] = Form(None, alias="candidateName"),
    position: Optional[str] = Form(None),
    service: ResumeService = Depends(get_resume_service),
):
    """
    Upload a resume (PDF, DOC, DOCX) with optional candidate name and position.
    """
    if resume is None:
        raise ValidationError("No file uploaded", reason="NO_FILE")

    logger.info(
        f"Upload received: {resume.filename}",
        extra={"content_type": resume.content_type},
    )
    # Read at most one byte past the limit
    content = resume.file.read(service.max_file_size + 1)
    return service.upload(
        content,
        original_name=resume.filename,
        file_type=resume.content_type,
        candidate_name=candidate_name,
        position=position,
    )


@router.delete("/{resume_id}", response_model=MessageResponse)
def delete_resume(resume_id: str, service: ResumeService = Depends(get_resume_service)):
    """Delete the stored file, then the record."""
    service.delete(resume_id)
    return {"message": "Resume deleted successfully"}
