"""Settings bundle export and import."""

from .archive import ArchiveBuilder, ArchiveReader
from .exporter import BundleExporter, ExportReport
from .importer import BundleImporter, ImportReport
from .lock import DirectoryLock
from .sources import FileBackedSource, SerializedSource, SettingsSource, SourceRegistry

__all__ = [
    "ArchiveBuilder",
    "ArchiveReader",
    "BundleExporter",
    "ExportReport",
    "BundleImporter",
    "ImportReport",
    "DirectoryLock",
    "FileBackedSource",
    "SerializedSource",
    "SettingsSource",
    "SourceRegistry",
]
