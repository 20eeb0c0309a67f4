import os
import re
import random
import time
import logging
from pathlib import Path
from typing import List, Optional, Union

from resume_scan.core.config import FILE_EXTENSIONS
from resume_scan.core.exceptions import StorageError

logger = logging.getLogger(__name__)

STORAGE_PREFIX = "resume"
_SAFE_EXTENSION = re.compile(r"^\.[a-z0-9]{1,10}$")
_MAX_NAME_ATTEMPTS = 5


def safe_extension(original_name: str) -> str:
    """Lowercased extension of the basename, or '' if it is not a plain alphanumeric one."""
    base = re.split(r"[\\/]", original_name or "")[-1]
    ext = os.path.splitext(base)[1].lower()
    return ext if _SAFE_EXTENSION.match(ext) else ""


def storage_extension(original_name: str, file_type: Optional[str] = None) -> str:
    """
    Extension for the stored copy. The original name's extension wins when it is
    a known document extension; otherwise it follows the accepted MIME type.
    """
    ext = safe_extension(original_name)
    if ext in FILE_EXTENSIONS.values():
        return ext
    return FILE_EXTENSIONS.get(file_type or "", ext)


def generate_storage_name(original_name: str, file_type: Optional[str] = None) -> str:
    """resume-<epoch ms>-<random>.<ext>; the user's filename never reaches the disk."""
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{STORAGE_PREFIX}-{unique_suffix}{storage_extension(original_name, file_type)}"


class FileStore:
    """
    Stores raw uploaded bytes in a single content directory.
    """

    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir)

    def _ensure_dir(self) -> None:
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Could not create upload directory: {e}") from e

    def save(self, content: bytes, original_name: str, file_type: Optional[str] = None) -> Path:
        """Write bytes under a fresh storage name and return the stored path."""
        self._ensure_dir()
        for _ in range(_MAX_NAME_ATTEMPTS):
            path = self.base_dir / generate_storage_name(original_name, file_type)
            try:
                # 'x' refuses to overwrite an existing file
                with open(path, "xb") as f:
                    f.write(content)
            except FileExistsError:
                continue
            except OSError as e:
                logger.error(f"Failed to write upload {path}: {e}", exc_info=True)
                raise StorageError(f"Failed to save file: {e}") from e
            logger.info(f"Stored upload as {path.name} ({len(content)} bytes)")
            return path
        raise StorageError("Failed to save file: could not allocate a unique storage name")

    def delete(self, path: Union[str, Path]) -> None:
        """Best-effort removal; a missing file is not an error."""
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.info(f"File already absent: {path}")
        except OSError as e:
            raise StorageError(f"Failed to delete file: {e}") from e

    def exists(self, path: Union[str, Path]) -> bool:
        return Path(path).is_file()

    def resolve(self, file_name: str) -> Optional[Path]:
        """Path of a stored file by storage name, or None if the name is unsafe or unknown."""
        if not file_name or file_name in (".", "..") or re.search(r"[\\/\x00]", file_name):
            return None
        path = self.base_dir / file_name
        return path if path.is_file() else None

    def list_files(self) -> List[Path]:
        if not self.base_dir.is_dir():
            return []
        return [p for p in self.base_dir.iterdir() if p.is_file()]
