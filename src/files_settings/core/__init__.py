"""Core modules shared across the settings application."""

from .events import EventBus, Event, EventType
from .errors import (
    BundleError,
    BundleBusyError,
    BundleIOError,
    EntryNotFoundError,
    InvalidArchiveError,
    SourceExportError,
    SourceImportError,
)

__all__ = [
    "EventBus",
    "Event",
    "EventType",
    "BundleError",
    "BundleBusyError",
    "BundleIOError",
    "EntryNotFoundError",
    "InvalidArchiveError",
    "SourceExportError",
    "SourceImportError",
]
