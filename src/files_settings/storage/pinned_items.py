"""Items pinned to the sidebar."""

from pathlib import Path
from typing import Callable, Optional
import logging

from ..core.constants import LocalSettings
from .base import JsonFileStore

logger = logging.getLogger(__name__)


class SidebarPinnedController(JsonFileStore):
    """Pinned sidebar items, kept in memory and mirrored to ``PinnedItems.json``.

    The file on disk is the canonical state. When it is replaced from outside
    (e.g. by a settings import), call ``reload()`` so the running process
    picks up the new list.
    """

    file_name = LocalSettings.PINNED_ITEMS_FILE_NAME

    def __init__(self, settings_dir: Path):
        """Initialize the controller.

        Args:
            settings_dir: Folder that holds the settings files
        """
        super().__init__(settings_dir)
        self._on_changed: list[Callable[[list[str]], None]] = []
        self.ensure_exists()
        self._items: list[str] = self.load_raw()

    def _default(self) -> list:
        return []

    def _validate(self, data):
        if not isinstance(data, list) or not all(isinstance(i, str) for i in data):
            raise TypeError("pinned items must be a list of paths")
        return data

    @property
    def json_file_name(self) -> str:
        """Name of the backing file."""
        return self.file_name

    @property
    def items(self) -> list[str]:
        """Get the pinned paths in sidebar order."""
        return list(self._items)

    def add_item(self, item_path: str, index: Optional[int] = None) -> bool:
        """Pin a path.

        Args:
            item_path: Path to pin
            index: Position in the sidebar (appended if None)

        Returns:
            True if the path was pinned, False if it already was
        """
        if item_path in self._items:
            return False

        if index is None:
            self._items.append(item_path)
        else:
            self._items.insert(index, item_path)
        self._save()
        return True

    def remove_item(self, item_path: str) -> bool:
        """Unpin a path. Return False if it was not pinned."""
        if item_path not in self._items:
            return False
        self._items.remove(item_path)
        self._save()
        return True

    def reload(self) -> list[str]:
        """Re-read the pinned items from disk.

        Returns:
            The reloaded list of pinned paths
        """
        self._items = self.load_raw()
        logger.info(f"Reloaded {len(self._items)} pinned items from {self.path}")
        self._notify()
        return self.items

    def on_changed(self, callback: Callable[[list[str]], None]) -> None:
        """Register a callback for when the pinned list changes."""
        self._on_changed.append(callback)

    def _save(self) -> None:
        self.save_raw(self._items)
        self._notify()

    def _notify(self) -> None:
        for callback in self._on_changed:
            try:
                callback(self.items)
            except Exception as e:
                logger.error(f"Error in pinned items callback: {e}")
