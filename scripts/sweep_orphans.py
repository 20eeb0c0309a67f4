import sys
import os
import argparse
import logging

# Ensure we can import resume_scan modules
sys.path.append(os.getcwd())

from resume_scan.core.config import settings
from resume_scan.database import SessionLocal, init_db
from resume_scan.repositories.resume_repository import ResumeRepository
from resume_scan.services.file_store import FileStore
from resume_scan.services.resume_service import ResumeService

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

def sweep(min_age_seconds: int):
    """Delete uploaded files that no resume record references."""
    init_db()
    db = SessionLocal()
    try:
        service = ResumeService(ResumeRepository(db), FileStore(settings.upload_dir))
        removed = service.sweep_orphans(min_age_seconds=min_age_seconds)
        for name in removed:
            logger.info(f"Removed orphan: {name}")
        logger.info(f"Done. {len(removed)} orphaned file(s) removed from {settings.upload_dir}")
    finally:
        db.close()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=sweep.__doc__)
    parser.add_argument(
        "--min-age",
        type=int,
        default=settings.orphan_min_age_seconds,
        help="Only remove files older than this many seconds",
    )
    args = parser.parse_args()
    sweep(args.min_age)
