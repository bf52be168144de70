"""Ephemeral on-disk storage for uploads awaiting extraction."""

import os
import random
import time
from pathlib import Path
from typing import BinaryIO

from docextract.core.exceptions import FileTooLargeError
from docextract.core.logging import get_logger

logger = get_logger(__name__)


def make_temp_name(original_filename: str | None) -> str:
    """Build a collision-resistant name: <epoch-ms>-<random><original extension>."""
    ext = Path(original_filename or "").suffix.lower()
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"


class UploadStorage:
    def __init__(self, upload_dir: Path, max_bytes: int, chunk_size: int = 1024 * 1024):
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes
        self.chunk_size = chunk_size

    def ensure_dir(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, original_filename: str | None) -> Path:
        return self.upload_dir / make_temp_name(original_filename)

    def save(self, source: BinaryIO, destination: Path) -> int:
        """Copy ``source`` into ``destination`` in chunks, enforcing the size limit.

        The destination may be left partially written when the limit is hit;
        callers delete it unconditionally.
        """
        self.ensure_dir()
        written = 0
        with open(destination, "wb") as out:
            while chunk := source.read(self.chunk_size):
                written += len(chunk)
                if written > self.max_bytes:
                    raise FileTooLargeError(self.max_bytes // (1024 * 1024))
                out.write(chunk)
        return written

    def delete(self, path: Path) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error(f"Failed to delete file {path}: {e}")
