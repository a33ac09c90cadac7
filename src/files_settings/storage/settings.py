"""User preferences management."""

import json
from pathlib import Path
from dataclasses import dataclass, asdict, field, fields
from typing import Optional
import logging

from ..core.constants import LocalSettings
from .base import JsonFileStore

logger = logging.getLogger(__name__)


@dataclass
class UserSettings:
    """User preferences with defaults."""

    # Appearance
    theme: str = "system"  # "dark", "light", or "system"
    language: str = "en"

    # Window
    window_width: int = 1000
    window_height: int = 680

    # Files and folders
    show_hidden_items: bool = False
    show_file_extensions: bool = True
    show_thumbnails: bool = True
    open_folders_in_new_tab: bool = False
    date_format: str = "application"  # "application", "system" or "universal"

    # Startup
    restore_tabs_on_startup: bool = True
    startup_paths: list = field(default_factory=list)

    # Diagnostics
    log_level: str = "INFO"


class UserSettingsService(JsonFileStore):
    """Manages user preferences persistence."""

    file_name = LocalSettings.USER_SETTINGS_FILE_NAME

    def __init__(self, settings_dir: Path):
        """Initialize the settings service.

        Args:
            settings_dir: Folder that holds the settings files
        """
        super().__init__(settings_dir)
        self._settings: Optional[UserSettings] = None

    def _validate(self, data):
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        known = {f.name for f in fields(UserSettings)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown settings: {', '.join(sorted(unknown))}")
        defaults = asdict(UserSettings())
        for key, value in data.items():
            if key not in known:
                continue
            expected = type(defaults[key])
            # bool is an int subclass; true is not a window size
            if not isinstance(value, expected) or (isinstance(value, bool) and expected is not bool):
                raise TypeError(f"setting {key!r} must be {expected.__name__}")
        paths = data.get("startup_paths", [])
        if not all(isinstance(p, str) for p in paths):
            raise TypeError("setting 'startup_paths' must be a list of paths")
        return UserSettings(**{k: v for k, v in data.items() if k in known})

    def _default(self) -> UserSettings:
        return UserSettings()

    def _dump(self, data: UserSettings) -> dict:
        return asdict(data)

    def load(self) -> UserSettings:
        """Load settings from disk or return defaults.

        Returns:
            The loaded or default settings
        """
        if self._settings is None:
            self._settings = self.load_raw()
            logger.info(f"Settings loaded from {self.path}")
        return self._settings

    def save(self, settings: Optional[UserSettings] = None) -> None:
        """Save settings to disk.

        Args:
            settings: Settings to save (uses current if None)
        """
        if settings is not None:
            self._settings = settings

        if self._settings is None:
            return

        self.save_raw(self._settings)
        logger.info(f"Settings saved to {self.path}")

    def update(self, **kwargs) -> UserSettings:
        """Update specific settings and save.

        Args:
            **kwargs: Setting names and values to update

        Returns:
            The updated settings
        """
        settings = self.load()

        for key, value in kwargs.items():
            if hasattr(settings, key):
                setattr(settings, key, value)
            else:
                logger.warning(f"Unknown setting: {key}")

        self.save(settings)
        return settings

    def export_settings(self) -> str:
        """Serialize the current preferences."""
        return json.dumps(asdict(self.load()), indent=2, ensure_ascii=False)

    def import_settings(self, text: str) -> None:
        """Replace the preferences with serialized content.

        Raises:
            SourceImportError: If the content is not a valid settings object
        """
        settings = self.parse(text)
        self.save(settings)
        logger.info("User settings imported")

