import sys
import os

# Ensure we can import resume_scan modules
sys.path.append(os.getcwd())

from resume_scan.core.config import settings
from resume_scan.database import SessionLocal, init_db
from resume_scan.repositories.resume_repository import ResumeRepository
from resume_scan.services.file_store import FileStore

def check_db():
    """Print every resume record and flag those whose stored file is missing."""
    init_db()
    db = SessionLocal()
    file_store = FileStore(settings.upload_dir)
    try:
        resumes = ResumeRepository(db).list_all()
        print(f"Resumes in DB: {len(resumes)}")
        dangling = 0
        for resume in resumes:
            present = file_store.exists(resume.file_path)
            if not present:
                dangling += 1
            marker = "ok" if present else "MISSING FILE"
            print(f" - {resume.id} {resume.original_name} -> {resume.file_name} [{marker}]")
        if dangling:
            print(f"{dangling} record(s) point at missing files")
    finally:
        db.close()

if __name__ == "__main__":
    check_db()
