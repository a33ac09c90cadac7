"""Shared JSON file store for the settings services."""

from pathlib import Path
from typing import Any
import json
import logging

from ..bundle.lock import DirectoryLock
from ..core.errors import SourceImportError
from ..utils.files import atomic_write_text

logger = logging.getLogger(__name__)


class JsonFileStore:
    """A JSON document kept in one file of the settings directory.

    Subclasses override ``_default()`` for the empty state and
    ``_validate()`` to check the shape of loaded or imported data.
    """

    file_name: str = ""

    def __init__(self, settings_dir: Path):
        self._settings_dir = Path(settings_dir)
        self._lock = DirectoryLock.for_directory(self._settings_dir)

    @property
    def settings_dir(self) -> Path:
        """Get the settings directory path."""
        return self._settings_dir

    @property
    def path(self) -> Path:
        """Full path of the backing file."""
        return self._settings_dir / self.file_name

    def _default(self) -> Any:
        return {}

    def _validate(self, data: Any) -> Any:
        """Return data in canonical form or raise ValueError/TypeError."""
        return data

    def _dump(self, data: Any) -> Any:
        """Convert in-memory data to its JSON form."""
        return data

    def load_raw(self) -> Any:
        """Read the backing file, falling back to the default on any error."""
        if not self.path.exists():
            return self._default()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return self._validate(json.load(f))
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Failed to load {self.path}, using defaults: {e}")
            return self._default()

    def save_raw(self, data: Any) -> None:
        """Write data as pretty-printed JSON, atomically and under the directory lock."""
        text = json.dumps(self._dump(data), indent=2, ensure_ascii=False)
        with self._lock.writing():
            atomic_write_text(self.path, text)
        logger.debug(f"Saved {self.path}")

    def ensure_exists(self) -> None:
        """Write the default document if the backing file is missing."""
        with self._lock.writing():
            if not self.path.exists():
                self.save_raw(self._default())
                logger.info(f"Created default {self.path}")

    def parse(self, text: str) -> Any:
        """Parse serialized content for this store.

        Raises:
            SourceImportError: If the text is not valid JSON of the right shape
        """
        try:
            return self._validate(json.loads(text))
        except (ValueError, TypeError) as e:
            raise SourceImportError(
                f"Malformed content for {self.file_name}: {e}", entry_name=self.file_name
            ) from e

    def validate_bytes(self, data: bytes) -> None:
        """Check that raw file content is a valid document for this store.

        Raises:
            SourceImportError: If the content cannot be used by this store
        """
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise SourceImportError(f"{self.file_name} is not UTF-8 text", entry_name=self.file_name) from e
        self.parse(text)
