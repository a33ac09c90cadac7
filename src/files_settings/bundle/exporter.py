"""Export of every settings source into one bundle archive."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Union
import logging

from ..core.errors import BundleError, BundleIOError, SourceExportError
from .archive import ArchiveBuilder
from .lock import DirectoryLock
from .sources import SettingsSource, SourceRegistry

logger = logging.getLogger(__name__)


@dataclass
class ExportReport:
    """Outcome of a successful export."""

    destination: Path
    entries: list[str] = field(default_factory=list)


class BundleExporter:
    """Writes all registered settings sources into a single archive.

    The archive is staged and only replaces the destination once every
    source has been written; any failure leaves the destination as it was.
    """

    def __init__(self, sources: Union[SourceRegistry, Iterable[SettingsSource]], settings_dir: Path):
        """Initialize the exporter.

        Args:
            sources: Settings sources in export order
            settings_dir: Settings folder the sources live in (used for locking)
        """
        self._sources = sources if isinstance(sources, SourceRegistry) else SourceRegistry(list(sources))
        self._lock = DirectoryLock.for_directory(settings_dir)

    def export_bundle(self, destination: Union[str, Path]) -> ExportReport:
        """Create or overwrite the archive at destination.

        Args:
            destination: Archive file to write

        Returns:
            The destination and the entry names written

        Raises:
            BundleBusyError: If another bundle operation is running
            SourceExportError: If a source failed to serialize its state
            BundleIOError: If a settings file or the archive could not be accessed
        """
        destination = Path(destination)
        logger.info(f"Exporting settings to {destination}")

        with self._lock.operation("export"):
            builder = ArchiveBuilder(destination)
            try:
                for source in self._sources:
                    self._export_source(source, builder)
                builder.commit()
            except BaseException:
                builder.discard()
                raise

        logger.info(f"Exported {len(builder.names)} settings entries to {destination}")
        return ExportReport(destination, builder.names)

    def _export_source(self, source: SettingsSource, builder: ArchiveBuilder) -> None:
        try:
            source.export_to(builder)
        except BundleError:
            raise
        except OSError as e:
            raise BundleIOError(f"Failed to read {source.entry_name}: {e}", entry_name=source.entry_name) from e
        except Exception as e:
            raise SourceExportError(
                f"Failed to export {source.entry_name}: {e}", entry_name=source.entry_name
            ) from e
        logger.debug(f"Added {source.entry_name} to bundle")
