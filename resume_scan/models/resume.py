import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime
from resume_scan.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    file_name = Column(Text, nullable=False, unique=True)
    original_name = Column(Text, nullable=False)
    file_size = Column(Integer, nullable=False)
    file_type = Column(Text, nullable=False)
    candidate_name = Column(Text, nullable=True)
    position = Column(Text, nullable=True)
    file_path = Column(Text, nullable=False)
    # Python-side default keeps microseconds on SQLite
    uploaded_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    def __repr__(self) -> str:
        return f"<Resume id={self.id} file_name={self.file_name!r}>"
