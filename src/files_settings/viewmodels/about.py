"""View-model for the About section of the settings page."""

import asyncio
import logging
import os
import platform
import subprocess
import sys
import webbrowser
from concurrent.futures import Future
from pathlib import Path
from typing import Any, Callable, Optional

from .. import __version__
from ..bundle import BundleExporter, BundleImporter, ExportReport, ImportReport
from ..core.constants import APP_NAME, FEEDBACK_LINKS, REPORT_ISSUE_URL, suggested_export_name
from ..core.errors import BundleError
from ..core.events import EventBus, EventType
from ..i18n import _
from ..storage.services import SettingsServices
from ..utils.async_helpers import AsyncBridge, GuiSchedule

logger = logging.getLogger(__name__)


def open_in_file_browser(path: Path) -> None:
    """Show a folder in the platform's file browser."""
    if sys.platform == "win32":
        os.startfile(str(path))  # type: ignore[attr-defined]
    elif sys.platform == "darwin":
        subprocess.Popen(["open", str(path)])
    else:
        subprocess.Popen(["xdg-open", str(path)])


class AboutViewModel:
    """Commands behind the About page.

    Settings export and import run on the async bridge so the window stays
    responsive. Failures of either are logged, published as
    ``BUNDLE_FAILED`` and shown to the user.
    """

    def __init__(
        self,
        services: SettingsServices,
        bridge: AsyncBridge,
        event_bus: EventBus,
        pick_save_file: Callable[[str], Optional[Path]],
        pick_open_file: Callable[[], Optional[Path]],
        show_error: Callable[[str, str], None],
        set_clipboard: Optional[Callable[[str], None]] = None,
        gui_schedule: Optional[GuiSchedule] = None,
        open_url: Callable[[str], Any] = webbrowser.open,
        open_folder: Callable[[Path], None] = open_in_file_browser,
        logs_dir: Optional[Path] = None,
        version: str = __version__,
    ):
        """Initialize the view-model.

        Args:
            services: Settings stores to export and import
            bridge: Runs the bundle operations in the background
            event_bus: Receives bundle and settings events
            pick_save_file: Asks for an export destination given a suggested
                            file name; returns None when cancelled
            pick_open_file: Asks for an archive to import; None when cancelled
            show_error: Shows a blocking error dialog (title, message)
            set_clipboard: Puts text on the clipboard
            gui_schedule: Schedules a callback on the GUI thread, like after()
            open_url: Opens a web link
            open_folder: Shows a folder in the file browser
            logs_dir: Folder that holds the application log
            version: Application version string
        """
        self._services = services
        self._bridge = bridge
        self._events = event_bus
        self._pick_save_file = pick_save_file
        self._pick_open_file = pick_open_file
        self._show_error = show_error
        self._set_clipboard = set_clipboard
        self._gui_schedule = gui_schedule
        self._open_url = open_url
        self._open_folder = open_folder
        self._logs_dir = logs_dir
        self._version = version

        sources = services.bundle_sources()
        self._exporter = BundleExporter(sources, services.settings_dir)
        self._importer = BundleImporter(sources, services.settings_dir)
        self._pending: Optional[Future] = None

    @property
    def version(self) -> str:
        return f"{_('settings_about_version_title')} {self._version}"

    @property
    def app_name(self) -> str:
        return APP_NAME

    @property
    def is_busy(self) -> bool:
        """Check if an export or import is still running."""
        return self._pending is not None and not self._pending.done()

    # -- settings bundle ------------------------------------------------------

    def export_settings(self) -> Optional[Future]:
        """Ask for a destination and export all settings there.

        Returns:
            Future of the running export, or None if nothing was started
        """
        if self.is_busy:
            logger.info("Settings export ignored, another operation is running")
            return None

        destination = self._pick_save_file(suggested_export_name(self._version))
        if not destination:
            return None

        self._pending = self._bridge.run_async(self.export_to(Path(destination)))
        return self._pending

    def import_settings(self) -> Optional[Future]:
        """Ask for an archive and import settings from it.

        Returns:
            Future of the running import, or None if nothing was started
        """
        if self.is_busy:
            logger.info("Settings import ignored, another operation is running")
            return None

        source = self._pick_open_file()
        if not source:
            return None

        self._pending = self._bridge.run_async(self.import_from(Path(source)))
        return self._pending

    async def export_to(self, destination: Path) -> Optional[ExportReport]:
        """Export all settings to destination.

        Returns:
            The export report, or None if the export failed
        """
        self._events.emit(EventType.BUNDLE_EXPORT_STARTED, destination)
        try:
            report = await asyncio.to_thread(self._exporter.export_bundle, destination)
        except Exception as e:
            self._report_failure("export", e)
            return None

        self._events.emit(EventType.BUNDLE_EXPORTED, report)
        return report

    async def import_from(self, source: Path) -> Optional[ImportReport]:
        """Import settings from the archive at source.

        Returns:
            The import report, or None if the import failed
        """
        self._events.emit(EventType.BUNDLE_IMPORT_STARTED, source)
        try:
            report = await asyncio.to_thread(self._importer.import_bundle, source)
        except Exception as e:
            self._report_failure("import", e)
            # Entries applied before the failure stay applied
            self._events.emit(EventType.SETTINGS_CHANGED)
            return None

        self._events.emit(EventType.BUNDLE_IMPORTED, report)
        self._events.emit(EventType.SETTINGS_CHANGED, report.applied)
        return report

    def _report_failure(self, operation: str, error: Exception) -> None:
        if isinstance(error, BundleError):
            logger.warning(f"Error {operation}ing settings: {error}", exc_info=True)
        else:
            logger.error(f"Unexpected error {operation}ing settings", exc_info=True)

        self._events.emit(EventType.BUNDLE_FAILED, error)
        title = _(f"settings_{operation}_error_title")
        message = _(f"settings_{operation}_error_description", error=str(error))
        self._on_gui(lambda: self._show_error(title, message))

    def _on_gui(self, func: Callable[[], None]) -> None:
        if self._gui_schedule is not None:
            self._gui_schedule(0, func)
        else:
            func()

    # -- other about page commands ------------------------------------------

    def copy_version_info(self) -> None:
        """Put the application and OS version on the clipboard."""
        if self._set_clipboard is None:
            return
        text = f"{self.version}\nOS Version: {platform.platform()}"
        try:
            self._set_clipboard(text)
        except Exception as e:
            logger.debug(f"Could not copy version info: {e}")

    def open_log_location(self) -> None:
        """Show the folder that holds the application log."""
        if self._logs_dir is None:
            return
        self._logs_dir.mkdir(parents=True, exist_ok=True)
        self._open_folder(self._logs_dir)

    def click_feedback_item(self, tag: str) -> None:
        """Open the web page behind an About page link.

        Args:
            tag: One of "Feedback", "ReleaseNotes", "Documentation",
                 "Contributors", "PrivacyPolicy" or "SupportUs"
        """
        if tag == "Feedback":
            url = REPORT_ISSUE_URL
        else:
            url = FEEDBACK_LINKS.get(tag)

        if url is None:
            logger.debug(f"Unknown about page item: {tag}")
            return

        self._open_url(url)
