import tempfile
from typing import IO, Iterator

# Generated files stay in memory up to this size, then spill to disk
SPOOL_MAX_SIZE = 8 * 1024 * 1024


def split_lines(text: str) -> list[str]:
    """Split on line breaks only, keeping empty and trailing lines."""
    return text.replace("\r\n", "\n").split("\n")


def new_spool() -> IO[bytes]:
    return tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_SIZE, mode="w+b")


def iter_chunks(fileobj: IO[bytes], chunk_size: int) -> Iterator[bytes]:
    """Yield the file from the start in chunks, closing it once exhausted."""
    try:
        fileobj.seek(0)
        while chunk := fileobj.read(chunk_size):
            yield chunk
    finally:
        fileobj.close()
