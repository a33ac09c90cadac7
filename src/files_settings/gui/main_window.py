"""Main settings window."""

import customtkinter as ctk
from pathlib import Path
from tkinter import filedialog, messagebox
from typing import TYPE_CHECKING, Callable, Optional
import logging

from .about_page import AboutPage
from ..core.constants import ARCHIVE_FILE_TYPES, ARCHIVE_SUFFIX
from ..core.events import Event, EventType
from ..i18n import _
from ..viewmodels.about import AboutViewModel

if TYPE_CHECKING:
    from ..app import FilesSettingsApp

logger = logging.getLogger(__name__)


class MainWindow(ctk.CTk):
    """Main application window hosting the About page."""

    def __init__(
        self,
        app: "FilesSettingsApp",
        on_close: Optional[Callable] = None,
        **kwargs,
    ):
        """Initialize the main window.

        Args:
            app: The main application instance
            on_close: Callback when window is closed
            **kwargs: Additional arguments for CTk
        """
        super().__init__(**kwargs)

        self.app = app
        self._on_close = on_close

        self.about_view_model = AboutViewModel(
            services=app.services,
            bridge=app.async_bridge,
            event_bus=app.event_bus,
            pick_save_file=self._pick_save_file,
            pick_open_file=self._pick_open_file,
            show_error=self._show_error,
            set_clipboard=self._set_clipboard,
            gui_schedule=self.after,
            logs_dir=app.logs_dir,
        )

        self._setup_window()
        self._setup_ui()
        self._bind_events()

    def _setup_window(self) -> None:
        """Configure the window."""
        self.title(_("app_title"))

        settings = self.app.services.user_settings.load()
        width = settings.window_width
        height = settings.window_height

        # Center window on screen
        x = (self.winfo_screenwidth() - width) // 2
        y = (self.winfo_screenheight() - height) // 2

        self.geometry(f"{width}x{height}+{x}+{y}")
        self.minsize(480, 400)

    def _setup_ui(self) -> None:
        """Set up the user interface."""
        self.grid_rowconfigure(1, weight=1)
        self.grid_columnconfigure(0, weight=1)

        header = ctk.CTkFrame(self, height=50, corner_radius=0)
        header.grid(row=0, column=0, sticky="ew")
        ctk.CTkLabel(
            header,
            text=_("about_title"),
            font=ctk.CTkFont(size=18, weight="bold"),
        ).pack(side="left", padx=15, pady=10)

        self.about_page = AboutPage(self, self.about_view_model)
        self.about_page.grid(row=1, column=0, sticky="nsew", padx=10, pady=10)

        footer = ctk.CTkFrame(self, height=30, corner_radius=0)
        footer.grid(row=2, column=0, sticky="ew")
        footer.grid_columnconfigure(0, weight=1)

        self.status_label = ctk.CTkLabel(
            footer,
            text=_("status_ready"),
            font=ctk.CTkFont(size=11),
            text_color="gray",
        )
        self.status_label.grid(row=0, column=0, padx=10, pady=5, sticky="w")

        self.pinned_label = ctk.CTkLabel(
            footer,
            text=_("pinned_count", count=len(self.app.services.pinned_items.items)),
            font=ctk.CTkFont(size=11),
            text_color="gray",
        )
        self.pinned_label.grid(row=0, column=1, padx=10, pady=5, sticky="e")

    def _bind_events(self) -> None:
        """Bind window and application events."""
        self.protocol("WM_DELETE_WINDOW", self._handle_close)

        bus = self.app.event_bus
        for event_type in (
            EventType.BUNDLE_EXPORT_STARTED,
            EventType.BUNDLE_IMPORT_STARTED,
            EventType.BUNDLE_EXPORTED,
            EventType.BUNDLE_IMPORTED,
            EventType.BUNDLE_FAILED,
        ):
            bus.subscribe(event_type, lambda e: self.after(0, lambda: self._on_bundle_event(e)))
        # Also published after a failed import that applied some entries
        bus.subscribe(
            EventType.SETTINGS_CHANGED,
            lambda e: self.after(0, self._apply_imported_settings),
        )
        bus.subscribe(
            EventType.PINNED_ITEMS_RELOADED,
            lambda e: self.after(0, lambda: self._update_pinned_count(e.data)),
        )

    def _on_bundle_event(self, event: Event) -> None:
        """Reflect bundle progress in the status bar."""
        if event.type == EventType.BUNDLE_EXPORT_STARTED:
            self.about_page.set_busy(True)
            self.set_status(_("status_exporting"))
            return
        if event.type == EventType.BUNDLE_IMPORT_STARTED:
            self.about_page.set_busy(True)
            self.set_status(_("status_importing"))
            return

        self.about_page.set_busy(False)
        if event.type == EventType.BUNDLE_EXPORTED:
            self.set_status(_("status_exported", path=event.data.destination))
        elif event.type == EventType.BUNDLE_IMPORTED:
            self.set_status(_("status_imported", count=len(event.data.applied)))
        else:
            self.set_status(_("status_failed"))

    def _apply_imported_settings(self) -> None:
        settings = self.app.services.user_settings.load()
        ctk.set_appearance_mode(settings.theme)

    def _update_pinned_count(self, items: list[str]) -> None:
        self.pinned_label.configure(text=_("pinned_count", count=len(items)))

    def _handle_close(self) -> None:
        """Handle window close event."""
        self.app.services.user_settings.update(
            window_width=self.winfo_width(),
            window_height=self.winfo_height(),
        )

        if self._on_close:
            self._on_close()
        else:
            self.destroy()

    # -- platform glue used by the view-model ----------------------------------

    def _pick_save_file(self, suggested_name: str) -> Optional[Path]:
        path = filedialog.asksaveasfilename(
            parent=self,
            initialfile=suggested_name,
            defaultextension=ARCHIVE_SUFFIX,
            filetypes=ARCHIVE_FILE_TYPES,
        )
        return Path(path) if path else None

    def _pick_open_file(self) -> Optional[Path]:
        path = filedialog.askopenfilename(parent=self, filetypes=ARCHIVE_FILE_TYPES)
        return Path(path) if path else None

    def _show_error(self, title: str, message: str) -> None:
        messagebox.showerror(title, message, parent=self)

    def _set_clipboard(self, text: str) -> None:
        self.clipboard_clear()
        self.clipboard_append(text)

    def set_status(self, message: str) -> None:
        """Set the status bar message.

        Args:
            message: The status message to display
        """
        self.status_label.configure(text=message)
