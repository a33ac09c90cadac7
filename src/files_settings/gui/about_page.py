"""About page with version info, settings backup and links."""

import customtkinter as ctk
from typing import TYPE_CHECKING
import logging

from ..core.constants import FEEDBACK_LINKS
from ..i18n import _

if TYPE_CHECKING:
    from ..viewmodels.about import AboutViewModel

logger = logging.getLogger(__name__)

LINK_TAGS = ["Feedback", *FEEDBACK_LINKS]


class AboutPage(ctk.CTkScrollableFrame):
    """The About section of the settings window."""

    def __init__(self, parent, view_model: "AboutViewModel", **kwargs):
        super().__init__(parent, **kwargs)

        self.view_model = view_model
        self._bundle_buttons: list[ctk.CTkButton] = []

        self._setup_ui()

    def _setup_ui(self) -> None:
        """Set up the page sections."""
        self.grid_columnconfigure(0, weight=1)

        self._setup_version_section().grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 5))
        self._setup_backup_section().grid(row=1, column=0, sticky="ew", padx=10, pady=5)
        self._setup_links_section().grid(row=2, column=0, sticky="ew", padx=10, pady=(5, 10))

    def _section(self, title: str) -> ctk.CTkFrame:
        frame = ctk.CTkFrame(self)
        ctk.CTkLabel(
            frame,
            text=title,
            font=ctk.CTkFont(size=14, weight="bold"),
        ).pack(anchor="w", padx=10, pady=(10, 5))
        return frame

    def _setup_version_section(self) -> ctk.CTkFrame:
        frame = self._section(self.view_model.app_name)

        ctk.CTkLabel(
            frame,
            text=self.view_model.version,
            font=ctk.CTkFont(size=12),
            text_color="gray",
        ).pack(anchor="w", padx=10)

        buttons = ctk.CTkFrame(frame, fg_color="transparent")
        buttons.pack(fill="x", padx=10, pady=10)

        ctk.CTkButton(
            buttons,
            text=_("copy_version"),
            command=self.view_model.copy_version_info,
        ).pack(side="left", padx=(0, 10))

        ctk.CTkButton(
            buttons,
            text=_("open_log_location"),
            fg_color=("gray70", "gray30"),
            command=self.view_model.open_log_location,
        ).pack(side="left")

        return frame

    def _setup_backup_section(self) -> ctk.CTkFrame:
        frame = self._section(_("backup_restore"))

        buttons = ctk.CTkFrame(frame, fg_color="transparent")
        buttons.pack(fill="x", padx=10, pady=10)

        for text, command in [
            (_("export_settings"), self.view_model.export_settings),
            (_("import_settings"), self.view_model.import_settings),
        ]:
            button = ctk.CTkButton(buttons, text=text, command=command)
            button.pack(side="left", padx=(0, 10))
            self._bundle_buttons.append(button)

        return frame

    def _setup_links_section(self) -> ctk.CTkFrame:
        frame = self._section(_("links"))

        for tag in LINK_TAGS:
            ctk.CTkButton(
                frame,
                text=_(f"link_{tag}"),
                anchor="w",
                fg_color="transparent",
                text_color=("gray10", "gray90"),
                hover_color=("gray80", "gray25"),
                command=lambda t=tag: self.view_model.click_feedback_item(t),
            ).pack(fill="x", padx=10, pady=2)

        return frame

    def set_busy(self, busy: bool) -> None:
        """Disable the export/import buttons while an operation runs."""
        state = "disabled" if busy else "normal"
        for button in self._bundle_buttons:
            button.configure(state=state)
