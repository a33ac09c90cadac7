"""Quick-access bundles: named groups of files and folders."""

from pathlib import Path
import json
import logging

from ..core.constants import LocalSettings
from .base import JsonFileStore

logger = logging.getLogger(__name__)


class BundlesSettingsService(JsonFileStore):
    """Bundles stored as ``{bundle name: [item paths]}``."""

    file_name = LocalSettings.BUNDLES_SETTINGS_FILE_NAME

    def __init__(self, settings_dir: Path):
        super().__init__(settings_dir)

    def _validate(self, data):
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        for name, items in data.items():
            if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
                raise TypeError(f"bundle {name!r} must be a list of paths")
        return data

    def load(self) -> dict[str, list[str]]:
        return self.load_raw()

    def save(self, bundles: dict[str, list[str]]) -> None:
        self.save_raw(bundles)

    def add_bundle(self, name: str) -> bool:
        """Create an empty bundle. Return False if the name is taken."""
        bundles = self.load()
        if name in bundles:
            return False
        bundles[name] = []
        self.save(bundles)
        return True

    def remove_bundle(self, name: str) -> bool:
        bundles = self.load()
        if bundles.pop(name, None) is None:
            return False
        self.save(bundles)
        return True

    def add_item(self, bundle: str, item_path: str) -> bool:
        """Add a path to a bundle, creating the bundle if needed."""
        bundles = self.load()
        items = bundles.setdefault(bundle, [])
        if item_path in items:
            return False
        items.append(item_path)
        self.save(bundles)
        return True

    def export_settings(self) -> str:
        return json.dumps(self.load(), indent=2, ensure_ascii=False)

    def import_settings(self, text: str) -> None:
        """Replace all bundles with serialized content.

        Raises:
            SourceImportError: If the content is not a bundles object
        """
        self.save(self.parse(text))
        logger.info("Bundles imported")
