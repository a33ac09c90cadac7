"""Settings sources and the registry that orders them inside a bundle."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Iterator, Optional
import logging

from ..utils.files import atomic_write_bytes
from .archive import ArchiveBuilder, ArchiveReader

logger = logging.getLogger(__name__)


class SettingsSource(ABC):
    """One configuration store that owns exactly one archive entry.

    All sources share the same two operations so the exporter and importer
    can iterate them without knowing what each one stores.
    """

    def __init__(self, entry_name: str):
        self.entry_name = entry_name

    @abstractmethod
    def export_to(self, builder: ArchiveBuilder) -> None:
        """Add this source's entry to an archive being built."""
        pass

    @abstractmethod
    def import_from(self, reader: ArchiveReader) -> None:
        """Restore this source from its entry in an open archive.

        Only called when the entry is present.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.entry_name!r})"


class SerializedSource(SettingsSource):
    """A store that serializes its in-memory state to text."""

    def __init__(
        self,
        entry_name: str,
        export_func: Callable[[], str],
        import_func: Callable[[str], None],
    ):
        """Initialize the source.

        Args:
            entry_name: Reserved archive entry name
            export_func: Returns the store's serialized state
            import_func: Replaces the store's state from serialized text
        """
        super().__init__(entry_name)
        self._export = export_func
        self._import = import_func

    def export_to(self, builder: ArchiveBuilder) -> None:
        builder.add_text(self.entry_name, self._export())

    def import_from(self, reader: ArchiveReader) -> None:
        self._import(reader.read_text(self.entry_name))


class FileBackedSource(SettingsSource):
    """A store whose canonical state is already a file in the settings folder.

    The file is copied into the archive under its own name and copied back
    on import. ``validate`` may check the archived bytes before the local
    file is replaced; ``on_imported`` lets the owner reload in-memory state
    after its file was replaced.
    """

    def __init__(
        self,
        path: Path,
        validate: Optional[Callable[[bytes], object]] = None,
        on_imported: Optional[Callable[[], object]] = None,
    ):
        self.path = Path(path)
        super().__init__(self.path.name)
        self._validate = validate
        self._on_imported = on_imported

    def export_to(self, builder: ArchiveBuilder) -> None:
        builder.add_file(self.path, self.entry_name)

    def import_from(self, reader: ArchiveReader) -> None:
        if self._validate is None:
            reader.extract_to(self.entry_name, self.path)
        else:
            data = reader.read_bytes(self.entry_name)
            self._validate(data)
            atomic_write_bytes(self.path, data)
        if self._on_imported is not None:
            self._on_imported()


class SourceRegistry:
    """Ordered collection of settings sources.

    Exporter and importer process sources in registration order. Entry names
    must be unique, so every source maps to exactly one archive entry.
    """

    def __init__(self, sources: Optional[list[SettingsSource]] = None):
        self._sources: dict[str, SettingsSource] = {}
        for source in sources or []:
            self.register(source)

    @property
    def sources(self) -> list[SettingsSource]:
        """Get all registered sources in order."""
        return list(self._sources.values())

    @property
    def entry_names(self) -> list[str]:
        return list(self._sources)

    def register(self, source: SettingsSource) -> SettingsSource:
        """Add a source to the end of the registry.

        Args:
            source: The source to add

        Returns:
            The registered source

        Raises:
            ValueError: If another source already owns the entry name
        """
        if source.entry_name in self._sources:
            raise ValueError(f"Entry name {source.entry_name!r} is already registered")

        self._sources[source.entry_name] = source
        logger.debug(f"Registered settings source: {source!r}")
        return source

    def unregister(self, entry_name: str) -> Optional[SettingsSource]:
        """Remove a source by its entry name.

        Returns:
            The removed source, or None if not found
        """
        return self._sources.pop(entry_name, None)

    def get(self, entry_name: str) -> Optional[SettingsSource]:
        return self._sources.get(entry_name)

    def __contains__(self, entry_name: str) -> bool:
        return entry_name in self._sources

    def __len__(self) -> int:
        return len(self._sources)

    def __iter__(self) -> Iterator[SettingsSource]:
        return iter(list(self._sources.values()))
