"""File helpers for atomic replacement of settings files."""

from pathlib import Path
from typing import BinaryIO
import io
import os
import shutil
import tempfile

COPY_CHUNK_SIZE = 1024 * 1024


def atomic_write_stream(target: Path, stream: BinaryIO) -> None:
    """Copy a binary stream into target, replacing it atomically.

    The data is written to a temporary file in the target's directory and
    moved over the target only once fully written, so readers never see a
    half-written file.

    Args:
        target: Destination file path
        stream: Readable binary stream positioned at the start of the data
    """
    target = Path(target)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as tmp:
            shutil.copyfileobj(stream, tmp, COPY_CHUNK_SIZE)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def atomic_write_bytes(target: Path, data: bytes) -> None:
    """Write bytes to target, replacing it atomically."""
    atomic_write_stream(target, io.BytesIO(data))


def atomic_write_text(target: Path, text: str, encoding: str = "utf-8") -> None:
    """Write text to target, replacing it atomically."""
    atomic_write_bytes(target, text.encode(encoding))
