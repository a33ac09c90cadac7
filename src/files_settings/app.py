"""Main application orchestrator."""

import customtkinter as ctk
import logging
import sys
from pathlib import Path
from typing import Optional

from .core.events import EventBus, EventType
from .core.constants import LocalSettings
from .i18n import init_translator
from .storage.paths import get_app_data_dir, get_logs_dir, get_settings_dir
from .storage.services import SettingsServices
from .utils.async_helpers import AsyncBridge
from .gui.main_window import MainWindow

logger = logging.getLogger(__name__)


class FilesSettingsApp:
    """Main application class that wires the stores, the bridge and the window."""

    def __init__(self, app_data_dir: Optional[Path] = None):
        """Initialize the application.

        Args:
            app_data_dir: Application data folder (platform default if None)
        """
        app_data_dir = app_data_dir or get_app_data_dir()
        self.logs_dir = get_logs_dir(app_data_dir)

        # Core services
        self.event_bus = EventBus()
        self.services = SettingsServices.open(get_settings_dir(app_data_dir))
        self.async_bridge = AsyncBridge()

        settings = self.services.user_settings.load()
        self._setup_logging(settings.log_level)
        logger.info("Initializing Files settings")

        init_translator(settings.language)
        ctk.set_appearance_mode(settings.theme)
        ctk.set_default_color_theme("blue")

        self.services.pinned_items.on_changed(
            lambda items: self.event_bus.emit(EventType.PINNED_ITEMS_RELOADED, items)
        )

        self.window = MainWindow(self, on_close=self.quit)

    def _setup_logging(self, level: str) -> None:
        """Configure logging to stdout and the log file."""
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            level=getattr(logging, str(level).upper(), logging.INFO),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=[
                logging.StreamHandler(sys.stdout),
                logging.FileHandler(self.logs_dir / LocalSettings.LOG_FILE_NAME, encoding="utf-8"),
            ],
        )

    def run(self) -> None:
        """Start the application."""
        logger.info("Starting Files settings")

        self.async_bridge.start()
        try:
            self.window.mainloop()
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        """Clean up resources."""
        logger.info("Cleaning up...")

        try:
            self.async_bridge.stop()
        except Exception as e:
            logger.error(f"Error stopping async bridge: {e}")

    def quit(self) -> None:
        """Quit the application."""
        logger.info("Quitting application")

        try:
            self.window.quit()  # Stop mainloop
            self.window.destroy()
        except Exception as e:
            logger.error(f"Error destroying window: {e}")


def main():
    """Application entry point."""
    app = FilesSettingsApp()
    app.run()


if __name__ == "__main__":
    main()
