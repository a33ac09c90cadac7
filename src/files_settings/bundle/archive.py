"""Named-entry archive container backed by a single zip file."""

from pathlib import Path
from typing import Optional, Union
import logging
import os
import shutil
import tempfile
import zipfile

from ..core.errors import BundleIOError, EntryNotFoundError, InvalidArchiveError
from ..utils.files import COPY_CHUNK_SIZE, atomic_write_stream

logger = logging.getLogger(__name__)


class ArchiveBuilder:
    """Collects named entries and writes them to a new archive.

    Entries are written only on ``commit()``: the archive is assembled in a
    temporary file next to the destination and then moved over it, so an
    existing file at the destination is either fully replaced or left
    untouched. Adding an entry under a name that is already present replaces
    the earlier content. File entries are streamed from disk at commit time.
    """

    def __init__(self, destination: Union[str, Path], compression: int = zipfile.ZIP_DEFLATED):
        """Initialize the builder.

        Args:
            destination: Path of the archive to create or overwrite
            compression: zipfile compression method
        """
        self.destination = Path(destination)
        self._compression = compression
        # name -> bytes content, or Path of a file to stream
        self._entries: dict[str, Union[bytes, Path]] = {}
        self._committed = False

    @property
    def names(self) -> list[str]:
        """Entry names in insertion order."""
        return list(self._entries)

    def _put(self, name: str, content: Union[bytes, Path]) -> None:
        if self._committed:
            raise RuntimeError(f"Archive {self.destination} is already committed")
        if not name or "/" in name or "\\" in name:
            raise ValueError(f"Invalid entry name: {name!r}")
        if name in self._entries:
            logger.debug(f"Replacing entry {name} in {self.destination}")
            del self._entries[name]
        self._entries[name] = content

    def add_text(self, name: str, text: str, encoding: str = "utf-8") -> None:
        """Add a text entry."""
        self._put(name, text.encode(encoding))

    def add_bytes(self, name: str, data: bytes) -> None:
        """Add a binary entry."""
        self._put(name, bytes(data))

    def add_file(self, path: Union[str, Path], name: Optional[str] = None) -> str:
        """Add a file from disk, copied byte for byte.

        Args:
            path: File to copy into the archive
            name: Entry name (defaults to the file's own name)

        Returns:
            The entry name used

        Raises:
            BundleIOError: If the file does not exist
        """
        path = Path(path)
        name = name or path.name
        if not path.is_file():
            raise BundleIOError(f"Settings file not found: {path}", entry_name=name)
        self._put(name, path)
        return name

    def commit(self) -> Path:
        """Write all entries and move the archive into place.

        Returns:
            The destination path

        Raises:
            BundleIOError: If the archive cannot be written
        """
        if self._committed:
            return self.destination

        parent = self.destination.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.destination.name}.", suffix=".tmp", dir=parent)
        except OSError as e:
            raise BundleIOError(f"Cannot create archive in {parent}: {e}") from e

        current = None
        try:
            with os.fdopen(fd, "wb") as raw, zipfile.ZipFile(raw, "w", compression=self._compression) as zf:
                for current, content in self._entries.items():
                    if isinstance(content, Path):
                        with open(content, "rb") as src, zf.open(current, "w", force_zip64=True) as dst:
                            shutil.copyfileobj(src, dst, COPY_CHUNK_SIZE)
                    else:
                        zf.writestr(current, content)
            os.replace(tmp_name, self.destination)
        except OSError as e:
            _remove_quietly(tmp_name)
            raise BundleIOError(f"Failed to write archive {self.destination}: {e}", entry_name=current) from e
        except BaseException:
            _remove_quietly(tmp_name)
            raise

        self._committed = True
        logger.info(f"Wrote {len(self._entries)} entries to {self.destination}")
        return self.destination

    def discard(self) -> None:
        """Drop all pending entries without writing anything."""
        self._entries.clear()

    def __enter__(self) -> "ArchiveBuilder":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.discard()


class ArchiveReader:
    """Read-only view of an existing archive."""

    def __init__(self, source: Union[str, Path]):
        """Open an archive.

        Args:
            source: Path of the archive file

        Raises:
            InvalidArchiveError: If the file is missing or not a valid archive
        """
        self.source = Path(source)
        try:
            self._zip = zipfile.ZipFile(self.source, "r")
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError) as e:
            raise InvalidArchiveError(f"Not a valid settings archive: {self.source} ({e})") from e

        # Last entry wins if a foreign tool wrote duplicate names
        self._infos: dict[str, zipfile.ZipInfo] = {}
        for info in self._zip.infolist():
            if not info.is_dir():
                self._infos[info.filename] = info

    def names(self) -> list[str]:
        """Entry names in archive order."""
        return list(self._infos)

    def __contains__(self, name: str) -> bool:
        return name in self._infos

    def _info(self, name: str) -> zipfile.ZipInfo:
        try:
            return self._infos[name]
        except KeyError:
            raise EntryNotFoundError(f"Entry not found in {self.source}: {name}", entry_name=name) from None

    def read_bytes(self, name: str) -> bytes:
        """Read an entry's raw content.

        Raises:
            EntryNotFoundError: If there is no such entry
            InvalidArchiveError: If the entry data is corrupt
        """
        info = self._info(name)
        try:
            return self._zip.read(info)
        except (zipfile.BadZipFile, EOFError) as e:
            raise InvalidArchiveError(f"Corrupt entry {name} in {self.source}: {e}", entry_name=name) from e

    def read_text(self, name: str, encoding: str = "utf-8") -> str:
        """Read an entry as text (a leading BOM is dropped)."""
        data = self.read_bytes(name)
        if encoding.lower().replace("-", "") == "utf8":
            encoding = "utf-8-sig"
        return data.decode(encoding)

    def extract_to(self, name: str, target: Union[str, Path]) -> Path:
        """Copy an entry to a file, atomically replacing any existing file.

        Raises:
            EntryNotFoundError: If there is no such entry
            InvalidArchiveError: If the entry data is corrupt
            BundleIOError: If the target cannot be written
        """
        info = self._info(name)
        target = Path(target)
        try:
            with self._zip.open(info, "r") as src:
                atomic_write_stream(target, src)
        except (zipfile.BadZipFile, EOFError) as e:
            raise InvalidArchiveError(f"Corrupt entry {name} in {self.source}: {e}", entry_name=name) from e
        except OSError as e:
            raise BundleIOError(f"Failed to write {target}: {e}", entry_name=name) from e
        return target

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> "ArchiveReader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _remove_quietly(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
