"""Tests for the event bus, the async bridge, paths and translations."""

from __future__ import annotations

import asyncio
import threading

import pytest

from files_settings.core.events import Event, EventBus, EventType
from files_settings.i18n import Translator, _, get_available_languages, init_translator
from files_settings.storage.paths import get_app_data_dir, get_logs_dir, get_settings_dir
from files_settings.utils.async_helpers import AsyncBridge


class TestEventBus:
    def test_publish_reaches_subscribers_of_that_type(self, event_bus):
        seen = []
        event_bus.subscribe(EventType.BUNDLE_EXPORTED, seen.append)
        event_bus.emit(EventType.BUNDLE_EXPORTED, "payload")
        event_bus.emit(EventType.BUNDLE_IMPORTED, "other")
        assert seen == [Event(EventType.BUNDLE_EXPORTED, "payload")]

    def test_subscribe_twice_delivers_once(self, event_bus):
        seen = []
        callback = seen.append
        event_bus.subscribe(EventType.SETTINGS_CHANGED, callback)
        event_bus.subscribe(EventType.SETTINGS_CHANGED, callback)
        event_bus.emit(EventType.SETTINGS_CHANGED)
        assert len(seen) == 1

    def test_unsubscribe(self, event_bus):
        seen = []
        callback = seen.append
        event_bus.subscribe(EventType.SETTINGS_CHANGED, callback)
        event_bus.unsubscribe(EventType.SETTINGS_CHANGED, callback)
        event_bus.emit(EventType.SETTINGS_CHANGED)
        assert seen == []

    def test_failing_handler_does_not_stop_delivery(self, event_bus):
        seen = []

        def broken(event):
            raise RuntimeError("handler bug")

        event_bus.subscribe(EventType.BUNDLE_FAILED, broken)
        event_bus.subscribe(EventType.BUNDLE_FAILED, seen.append)
        event_bus.emit(EventType.BUNDLE_FAILED)
        assert len(seen) == 1


class TestAsyncBridge:
    def test_run_async_result(self, bridge):
        async def work():
            await asyncio.sleep(0)
            return 42

        assert bridge.run_async(work()).result(timeout=5) == 42

    def test_callbacks(self, bridge):
        done = threading.Event()
        results = []

        def on_result(value):
            results.append(value)
            done.set()

        bridge.run_blocking(sum, [1, 2, 3], callback=on_result)
        assert done.wait(timeout=5)
        assert results == [6]

    def test_error_callback_through_gui_schedule(self, bridge):
        done = threading.Event()
        scheduled = []

        def schedule(delay, func):
            scheduled.append(func)
            done.set()

        async def fail():
            raise ValueError("boom")

        errors = []
        bridge.run_async(fail(), error_callback=errors.append, gui_schedule=schedule)
        assert done.wait(timeout=5)
        scheduled[0]()
        assert isinstance(errors[0], ValueError)

    def test_result_callback_through_gui_schedule(self, bridge):
        done = threading.Event()
        scheduled = []

        def schedule(delay, func):
            scheduled.append(func)
            done.set()

        results = []
        bridge.run_blocking(sum, [4, 5], callback=results.append, gui_schedule=schedule)
        assert done.wait(timeout=5)
        scheduled[0]()
        assert results == [9]

    def test_not_running_returns_none(self):
        async def work():
            return 1

        assert AsyncBridge().run_async(work()) is None

    def test_stop_is_idempotent(self):
        bridge = AsyncBridge()
        bridge.start()
        assert bridge.is_running
        bridge.stop()
        bridge.stop()
        assert not bridge.is_running


class TestPaths:
    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FILES_SETTINGS_HOME", str(tmp_path))
        assert get_app_data_dir() == tmp_path
        assert get_settings_dir() == tmp_path / "settings"
        assert get_logs_dir() == tmp_path / "logs"

    def test_explicit_folder(self, tmp_path):
        assert get_settings_dir(tmp_path) == tmp_path / "settings"


class TestTranslations:
    @pytest.fixture(autouse=True)
    def restore_english(self):
        yield
        init_translator("en")

    def test_format_arguments(self):
        init_translator("en")
        assert _("pinned_count", count=3) == "3 pinned items"

    def test_unknown_key_returns_key(self):
        init_translator("en")
        assert _("no_such_key") == "no_such_key"

    def test_unknown_language_falls_back_to_english(self):
        init_translator("xx")
        assert Translator.get_language() == "en"

    def test_languages_have_same_keys(self):
        codes = [code for code, _name in get_available_languages()]
        assert codes == ["en", "sv"]
        keys = []
        for code in codes:
            init_translator(code)
            keys.append(set(Translator._translations))
        assert keys[0] == keys[1]
