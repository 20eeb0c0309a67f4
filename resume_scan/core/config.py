import os
import logging
from pydantic import BaseModel, Field
from typing import List
from dotenv import load_dotenv

load_dotenv()

PDF_TYPE = "application/pdf"
DOC_TYPE = "application/msword"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

# Storage extension for each accepted type
FILE_EXTENSIONS = {
    PDF_TYPE: ".pdf",
    DOC_TYPE: ".doc",
    DOCX_TYPE: ".docx",
}


class Config(BaseModel):
    app_name: str = "Resume Scan"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./resumes.db")

    # Uploaded files
    upload_dir: str = os.getenv("UPLOAD_DIR", "./uploads")
    max_file_size: int = int(os.getenv("MAX_FILE_SIZE", str(10 * 1024 * 1024)))  # 10 MiB
    allowed_file_types: List[str] = [PDF_TYPE, DOC_TYPE, DOCX_TYPE]
    orphan_min_age_seconds: int = int(os.getenv("ORPHAN_MIN_AGE_SECONDS", "3600"))

    # CORS — comma-separated origins loaded from env.
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:3000,http://127.0.0.1:3000,"
                "http://localhost:5000,http://127.0.0.1:5000",
            ).split(",")
            if o.strip()
        ]
    )

    # Rate limiting
    rate_limit_enabled: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    upload_rate_limit: str = os.getenv("UPLOAD_RATE_LIMIT", "10/minute")


settings = Config()

# --- Startup Validation ---
_logger = logging.getLogger(__name__)
if settings.max_file_size <= 0:
    raise RuntimeError(f"FATAL: MAX_FILE_SIZE must be positive, got {settings.max_file_size}.")
if settings.environment != "development" and settings.database_url.startswith("sqlite"):
    _logger.warning("⚠ Using SQLite outside development — set DATABASE_URL to a PostgreSQL URL.")
