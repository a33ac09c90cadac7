"""Restore of settings sources from a bundle archive."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Union
import logging

from ..core.errors import BundleError, BundleIOError, SourceImportError
from .archive import ArchiveReader
from .lock import DirectoryLock
from .sources import SettingsSource, SourceRegistry

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    """Outcome of a successful import."""

    source: Path
    applied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class BundleImporter:
    """Hands each archive entry back to the settings source that owns it.

    Entries missing from the archive are skipped, so bundles from older
    versions with fewer entries still import. The first failing source stops
    the import; sources restored before it stay restored.
    """

    def __init__(self, sources: Union[SourceRegistry, Iterable[SettingsSource]], settings_dir: Path):
        """Initialize the importer.

        Args:
            sources: Settings sources in import order
            settings_dir: Settings folder the sources live in (used for locking)
        """
        self._sources = sources if isinstance(sources, SourceRegistry) else SourceRegistry(list(sources))
        self._lock = DirectoryLock.for_directory(settings_dir)

    def import_bundle(self, source: Union[str, Path]) -> ImportReport:
        """Restore settings from the archive at source.

        Args:
            source: Archive file to read

        Returns:
            Which entries were applied and which were missing

        Raises:
            BundleBusyError: If another bundle operation is running
            InvalidArchiveError: If source is not a readable archive (nothing is changed)
            SourceImportError: If a source rejected its entry
            BundleIOError: If a settings file could not be written
        """
        source = Path(source)
        logger.info(f"Importing settings from {source}")
        report = ImportReport(source)

        with self._lock.operation("import"), ArchiveReader(source) as reader:
            for settings_source in self._sources:
                name = settings_source.entry_name
                if name not in reader:
                    logger.info(f"Bundle has no {name}, keeping current settings")
                    report.skipped.append(name)
                    continue

                try:
                    self._import_source(settings_source, reader)
                except BundleError:
                    if report.applied:
                        logger.warning(f"Import stopped at {name}; already applied: {', '.join(report.applied)}")
                    raise
                report.applied.append(name)

        logger.info(f"Imported {len(report.applied)} settings entries from {source}")
        return report

    def _import_source(self, settings_source: SettingsSource, reader: ArchiveReader) -> None:
        name = settings_source.entry_name
        try:
            settings_source.import_from(reader)
        except BundleError:
            raise
        except OSError as e:
            raise BundleIOError(f"Failed to restore {name}: {e}", entry_name=name) from e
        except Exception as e:
            raise SourceImportError(f"Failed to import {name}: {e}", entry_name=name) from e
        logger.debug(f"Restored {name} from bundle")
