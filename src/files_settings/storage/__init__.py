"""Storage and persistence layer."""

from .settings import UserSettingsService, UserSettings
from .bundles import BundlesSettingsService
from .file_tags import FileTag, FileTagsDatabase, FileTagsSettingsService
from .pinned_items import SidebarPinnedController
from .terminals import Terminal, TerminalController
from .services import SettingsServices

__all__ = [
    "UserSettingsService",
    "UserSettings",
    "BundlesSettingsService",
    "FileTag",
    "FileTagsDatabase",
    "FileTagsSettingsService",
    "SidebarPinnedController",
    "Terminal",
    "TerminalController",
    "SettingsServices",
]
