"""The set of settings stores owned by one settings folder."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging

from ..bundle.sources import FileBackedSource, SerializedSource, SourceRegistry
from .bundles import BundlesSettingsService
from .file_tags import FileTagsDatabase, FileTagsSettingsService
from .paths import get_settings_dir
from .pinned_items import SidebarPinnedController
from .settings import UserSettingsService
from .terminals import TerminalController

logger = logging.getLogger(__name__)


@dataclass
class SettingsServices:
    """All settings stores of one settings folder."""

    settings_dir: Path
    user_settings: UserSettingsService
    bundles: BundlesSettingsService
    pinned_items: SidebarPinnedController
    terminals: TerminalController
    file_tags: FileTagsSettingsService
    file_tags_db: FileTagsDatabase

    @classmethod
    def open(cls, settings_dir: Optional[Path] = None) -> "SettingsServices":
        """Create every store for a settings folder.

        Args:
            settings_dir: Settings folder (the platform default if None)
        """
        settings_dir = Path(settings_dir) if settings_dir is not None else get_settings_dir()
        settings_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Using settings folder {settings_dir}")

        return cls(
            settings_dir=settings_dir,
            user_settings=UserSettingsService(settings_dir),
            bundles=BundlesSettingsService(settings_dir),
            pinned_items=SidebarPinnedController(settings_dir),
            terminals=TerminalController(settings_dir),
            file_tags=FileTagsSettingsService(settings_dir),
            file_tags_db=FileTagsDatabase(settings_dir),
        )

    def bundle_sources(self) -> SourceRegistry:
        """Settings sources in the order they appear in a bundle."""
        return SourceRegistry([
            SerializedSource(
                self.user_settings.file_name,
                self.user_settings.export_settings,
                self.user_settings.import_settings,
            ),
            SerializedSource(
                self.bundles.file_name,
                self.bundles.export_settings,
                self.bundles.import_settings,
            ),
            FileBackedSource(
                self.pinned_items.path,
                validate=self.pinned_items.validate_bytes,
                on_imported=self.pinned_items.reload,
            ),
            FileBackedSource(self.terminals.path, validate=self.terminals.validate_bytes),
            SerializedSource(
                self.file_tags.file_name,
                self.file_tags.export_settings,
                self.file_tags.import_settings,
            ),
            FileBackedSource(self.file_tags_db.path, validate=self.file_tags_db.validate_bytes),
        ])
