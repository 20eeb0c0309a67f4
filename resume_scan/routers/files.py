import mimetypes

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from resume_scan.core.config import FILE_EXTENSIONS
from resume_scan.dependencies import get_file_store
from resume_scan.services.file_store import FileStore

router = APIRouter(prefix="/files", tags=["Files"])

# Word types are missing from some platforms' mimetypes tables
_MEDIA_TYPES = {ext: mime for mime, ext in FILE_EXTENSIONS.items()}


def _media_type_for(file_name: str) -> str:
    ext = "." + file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""
    if ext in _MEDIA_TYPES:
        return _MEDIA_TYPES[ext]
    return mimetypes.guess_type(file_name)[0] or "application/octet-stream"


@router.get("/{filename}")
def get_file(filename: str, file_store: FileStore = Depends(get_file_store)):
    """Serve raw uploaded bytes inline for the document viewer."""
    path = file_store.resolve(filename)
    if path is None:
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(
        path,
        media_type=_media_type_for(filename),
        content_disposition_type="inline",
        filename=filename,
    )
