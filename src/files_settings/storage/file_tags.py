"""File tag definitions and the tag database mapping files to tags."""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional
import json
import logging
import uuid

from ..core.constants import LocalSettings
from .base import JsonFileStore

logger = logging.getLogger(__name__)


@dataclass
class FileTag:
    """A user-defined tag that can be attached to files."""

    uid: str
    name: str
    color: str = "#0078D4"


class FileTagsSettingsService(JsonFileStore):
    """Tag definitions, stored as a JSON list."""

    file_name = LocalSettings.FILE_TAG_SETTINGS_FILE_NAME

    def __init__(self, settings_dir: Path):
        super().__init__(settings_dir)

    def _default(self) -> list:
        return []

    def _validate(self, data):
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON list, got {type(data).__name__}")
        return [FileTag(**item) for item in data]

    def _dump(self, data: list[FileTag]) -> list[dict]:
        return [asdict(tag) for tag in data]

    def load(self) -> list[FileTag]:
        return self.load_raw()

    def save(self, tags: list[FileTag]) -> None:
        self.save_raw(tags)

    def get_tag(self, uid: str) -> Optional[FileTag]:
        """Get a tag by its uid, or None if not defined."""
        return next((tag for tag in self.load() if tag.uid == uid), None)

    def add_tag(self, name: str, color: str = "#0078D4") -> FileTag:
        tags = self.load()
        tag = FileTag(uid=uuid.uuid4().hex, name=name, color=color)
        tags.append(tag)
        self.save(tags)
        return tag

    def remove_tag(self, uid: str) -> bool:
        tags = self.load()
        remaining = [tag for tag in tags if tag.uid != uid]
        if len(remaining) == len(tags):
            return False
        self.save(remaining)
        return True

    def export_settings(self) -> str:
        return json.dumps(self._dump(self.load()), indent=2, ensure_ascii=False)

    def import_settings(self, text: str) -> None:
        """Replace all tag definitions with serialized content.

        Raises:
            SourceImportError: If the content is not a list of tags
        """
        self.save(self.parse(text))
        logger.info("File tags imported")


class FileTagsDatabase(JsonFileStore):
    """Which tags are attached to which files.

    The database lives in a single text-encoded file, so a bundle copies it
    as-is instead of serializing it.
    """

    file_name = LocalSettings.FILE_TAGS_DB_FILE_NAME

    def __init__(self, settings_dir: Path):
        super().__init__(settings_dir)
        self.ensure_exists()

    def _validate(self, data):
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        for file_path, uids in data.items():
            if not isinstance(uids, list):
                raise TypeError(f"tags of {file_path!r} must be a list")
        return data

    def get_tags(self, file_path: str) -> list[str]:
        """Get the tag uids attached to a file."""
        return self.load_raw().get(file_path, [])

    def set_tags(self, file_path: str, uids: list[str]) -> None:
        """Attach exactly these tag uids to a file (empty list detaches all)."""
        db = self.load_raw()
        if uids:
            db[file_path] = list(uids)
        else:
            db.pop(file_path, None)
        self.save_raw(db)

    def files_with_tag(self, uid: str) -> list[str]:
        return [path for path, uids in self.load_raw().items() if uid in uids]

    def export_text(self) -> str:
        """Text export of the whole database."""
        return json.dumps(self.load_raw(), indent=2, ensure_ascii=False)

    def import_text(self, text: str) -> None:
        """Replace the whole database from a text export.

        Raises:
            SourceImportError: If the text is not a valid database export
        """
        self.save_raw(self.parse(text))
        logger.info("File tags database imported")
