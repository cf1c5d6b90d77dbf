import os
import random
import shutil
import time
from pathlib import Path
from typing import BinaryIO, Optional

import structlog

from ..config import get_settings

logger = structlog.get_logger(__name__)


class FileStorageService:
    """
    Persists uploaded media under a single upload root.

    Stored files are addressed by their public relative path
    (``/uploads/<basename>-<timestamp>-<random>.<ext>``); nothing outside this
    class turns such a path back into a filesystem location.
    """

    def __init__(self, storage_dir: str, url_prefix: str = "/uploads"):
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self.url_prefix = "/" + url_prefix.strip("/")

    def _unique_filename(self, original_filename: str) -> str:
        name = os.path.basename(original_filename or "")
        basename, extension = os.path.splitext(name)
        basename = basename or "file"
        unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        return f"{basename}-{unique_suffix}{extension.lower()}"

    def _relative_path(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def save_bytes(self, content: bytes, original_filename: str) -> str:
        filename = self._unique_filename(original_filename)
        file_path = self.storage_dir / filename
        file_path.write_bytes(content)
        logger.info("Stored file", path=str(file_path), size=len(content))
        return self._relative_path(filename)

    def save_stream(self, stream: BinaryIO, original_filename: str) -> str:
        filename = self._unique_filename(original_filename)
        file_path = self.storage_dir / filename
        if hasattr(stream, "seek"):
            stream.seek(0)
        try:
            with open(file_path, "wb") as stored_file:
                shutil.copyfileobj(stream, stored_file)
        except Exception:
            if file_path.exists():
                file_path.unlink()
            raise
        logger.info("Stored file", path=str(file_path), size=file_path.stat().st_size)
        return self._relative_path(filename)

    def resolve(self, relative_path: Optional[str]) -> Optional[Path]:
        """Map a stored relative path to its file, or None if it is not ours."""
        if not relative_path:
            return None
        prefix = self.url_prefix + "/"
        if not relative_path.startswith(prefix):
            return None
        candidate = (self.storage_dir / relative_path[len(prefix):]).resolve()
        root = self.storage_dir.resolve()
        if candidate == root or root not in candidate.parents:
            return None
        return candidate

    def exists(self, relative_path: Optional[str]) -> bool:
        file_path = self.resolve(relative_path)
        return file_path is not None and file_path.is_file()

    def delete(self, relative_path: Optional[str]) -> bool:
        file_path = self.resolve(relative_path)
        if file_path is None:
            return False

        try:
            if file_path.exists():
                os.remove(file_path)
                logger.info("Deleted file", path=str(file_path))
                return True
        except OSError as e:
            logger.warning("Failed to delete file", path=str(file_path), error=str(e))
        return False


def create_file_storage() -> FileStorageService:
    settings = get_settings()
    return FileStorageService(settings.upload_dir, settings.upload_url_prefix)
