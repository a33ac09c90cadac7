"""Failure taxonomy for settings bundle operations."""

from typing import Optional


class BundleError(Exception):
    """Base class for every bundle export/import failure."""

    def __init__(self, message: str, entry_name: Optional[str] = None):
        super().__init__(message)
        self.entry_name = entry_name


class InvalidArchiveError(BundleError):
    """The file is missing, unreadable or not a valid archive container."""


class EntryNotFoundError(BundleError, KeyError):
    """A named entry is absent from an archive."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class SourceExportError(BundleError):
    """A settings source failed to serialize its state."""


class SourceImportError(BundleError):
    """A settings source rejected the content it was given."""


class BundleIOError(BundleError):
    """Disk or permission failure while reading or writing settings files."""


class BundleBusyError(BundleError):
    """Another bundle operation is already running on the settings directory."""
