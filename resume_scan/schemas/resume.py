from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# --- RESUME SCHEMAS ---
# JSON uses camelCase (fileName, uploadedAt...), the table uses snake_case.

class ResumeCreate(BaseModel):
    """Row data handed to the repository once the file is stored."""
    file_name: str
    original_name: str
    file_size: int = Field(gt=0)
    file_type: str
    candidate_name: Optional[str] = None
    position: Optional[str] = None
    file_path: str

class ResumeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    file_name: str
    original_name: str
    file_size: int
    file_type: str
    candidate_name: Optional[str] = None
    position: Optional[str] = None
    file_path: str
    uploaded_at: datetime

class MessageResponse(BaseModel):
    message: str
