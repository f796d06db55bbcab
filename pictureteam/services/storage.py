"""Local filesystem storage for uploaded image files."""
import os
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO, Optional

from pictureteam.constants import DEFAULT_IMAGE_EXTENSION, UPLOAD_CHUNK_SIZE
from pictureteam.utils.logger import logger


class ImageStorage:
    """Stores image bytes at ``<root>/<image id>.<extension>``.

    Writes go to a hidden temp file first and are moved into place with an
    atomic rename, so a visible image file is always complete.
    """

    CONTENT_TYPES = {
        ".png": "image/png",
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".gif": "image/gif",
        ".webp": "image/webp",
        ".bmp": "image/bmp",
        ".svg": "image/svg+xml",
        ".tif": "image/tiff",
        ".tiff": "image/tiff",
    }

    def __init__(self, root: Path):
        self.root = Path(root)

    @staticmethod
    def extension_for(filename: Optional[str]) -> str:
        """Extension from a declared filename, or the default one."""
        if filename:
            ext = Path(filename).suffix.lstrip(".")
            if ext and ext.isalnum():
                return ext
        return DEFAULT_IMAGE_EXTENSION

    def path_for(self, image_id: uuid.UUID, extension: str) -> Path:
        return self.root / f"{image_id}.{extension}"

    def find(self, image_id: uuid.UUID) -> Optional[Path]:
        """Path of the stored file for an image, if any."""
        if not self.root.is_dir():
            return None
        matches = sorted(self.root.glob(f"{image_id}.*"))
        return matches[0] if matches else None

    def exists(self, image_id: uuid.UUID) -> bool:
        return self.find(image_id) is not None

    def write_temp(self, image_id: uuid.UUID, stream: BinaryIO) -> Path:
        """
        Copy a stream into a temp file next to the final location.

        The data is flushed and fsynced before returning.

        Raises:
            OSError: On any filesystem failure; the temp file is removed
        """
        self.root.mkdir(parents=True, exist_ok=True)
        temp_path = self.root / f".{image_id}.{uuid.uuid4().hex}.upload"
        try:
            with open(temp_path, "wb") as f:
                shutil.copyfileobj(stream, f, UPLOAD_CHUNK_SIZE)
                f.flush()
                os.fsync(f.fileno())
        except OSError:
            self.discard(temp_path)
            raise
        return temp_path

    def commit(self, temp_path: Path, final_path: Path) -> None:
        """Atomically move a completed temp file into place."""
        os.replace(temp_path, final_path)

    def discard(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove {path}: {e}")

    @classmethod
    def content_type(cls, path: Path) -> str:
        """Get content type from file extension."""
        return cls.CONTENT_TYPES.get(path.suffix.lower(), "application/octet-stream")
