"""Tests for how the main window reacts to settings events.

The window handlers run against a stand-in object, so no Tk display is needed.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

pytest.importorskip("customtkinter")

from files_settings.core.events import EventType
from files_settings.gui import main_window
from files_settings.gui.main_window import MainWindow
from files_settings.viewmodels import AboutViewModel

from conftest import write_zip

RESULT_TIMEOUT = 10


def window_stub(services, event_bus, **overrides):
    """Just the attributes the window's event handlers touch."""
    attrs = dict(
        app=SimpleNamespace(event_bus=event_bus, services=services),
        protocol=lambda *args: None,
        after=lambda delay, func: func(),
        _on_bundle_event=lambda event: None,
        _update_pinned_count=lambda items: None,
        _apply_imported_settings=lambda: None,
        _handle_close=lambda: None,
    )
    attrs.update(overrides)
    return SimpleNamespace(**attrs)


class TestSettingsChanged:
    def test_partial_import_reapplies_user_settings(self, populated_services, bridge, event_bus, tmp_path):
        applied = []
        MainWindow._bind_events(
            window_stub(populated_services, event_bus, _apply_imported_settings=lambda: applied.append(True))
        )
        vm = AboutViewModel(
            services=populated_services,
            bridge=bridge,
            event_bus=event_bus,
            pick_save_file=lambda name: None,
            pick_open_file=lambda: write_zip(
                tmp_path / "partial.zip",
                {"user_settings.json": '{"theme": "light"}', "bundles.json": "[not json"},
            ),
            show_error=lambda title, message: None,
        )

        assert vm.import_settings().result(timeout=RESULT_TIMEOUT) is None

        assert populated_services.user_settings.load().theme == "light"
        assert applied == [True]

    def test_apply_uses_current_theme(self, populated_services, event_bus, monkeypatch):
        modes = []
        monkeypatch.setattr(main_window.ctk, "set_appearance_mode", modes.append)
        populated_services.user_settings.update(theme="light")

        MainWindow._apply_imported_settings(window_stub(populated_services, event_bus))

        assert modes == ["light"]
