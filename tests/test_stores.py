"""Tests for the settings stores.

Each store is tested for its defaults, its own operations, and the
export/import contract it offers to the settings bundle.
"""

from __future__ import annotations

import json

import pytest

from files_settings.core.errors import SourceImportError
from files_settings.storage import (
    BundlesSettingsService,
    FileTagsDatabase,
    FileTagsSettingsService,
    SidebarPinnedController,
    TerminalController,
    UserSettings,
    UserSettingsService,
)


# -- UserSettingsService -------------------------------------------------------


class TestUserSettingsService:
    def test_defaults_when_missing(self, settings_dir):
        service = UserSettingsService(settings_dir)
        assert service.load() == UserSettings()

    def test_update_persists(self, settings_dir):
        UserSettingsService(settings_dir).update(theme="dark", window_width=1200)
        reloaded = UserSettingsService(settings_dir).load()
        assert reloaded.theme == "dark"
        assert reloaded.window_width == 1200

    def test_update_ignores_unknown_keys(self, settings_dir):
        settings = UserSettingsService(settings_dir).update(no_such_setting=1)
        assert not hasattr(settings, "no_such_setting")

    def test_corrupt_file_falls_back_to_defaults(self, settings_dir):
        (settings_dir / "user_settings.json").write_text("not json{{{")
        assert UserSettingsService(settings_dir).load() == UserSettings()

    def test_export_import(self, settings_dir, tmp_path):
        source = UserSettingsService(settings_dir)
        source.update(theme="light", show_file_extensions=False)

        target = UserSettingsService(tmp_path)
        target.import_settings(source.export_settings())

        assert target.load() == source.load()
        assert UserSettingsService(tmp_path).load() == source.load()

    def test_import_partial_object_uses_defaults(self, settings_dir):
        service = UserSettingsService(settings_dir)
        service.import_settings('{"theme": "dark"}')
        assert service.load() == UserSettings(theme="dark")

    def test_import_startup_paths(self, settings_dir):
        service = UserSettingsService(settings_dir)
        service.import_settings('{"startup_paths": ["C:\\\\Users", "D:\\\\Music"], "window_width": 1280}')
        settings = UserSettingsService(settings_dir).load()
        assert settings.startup_paths == ["C:\\Users", "D:\\Music"]
        assert settings.window_width == 1280

    def test_import_skips_unknown_keys(self, settings_dir):
        service = UserSettingsService(settings_dir)
        service.import_settings('{"theme": "dark", "from_a_newer_version": true}')
        assert service.load().theme == "dark"

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            "[]",
            '{"theme": 5}',
            '{"show_hidden_items": "yes"}',
            '{"window_width": true}',
            '{"window_height": false}',
            '{"startup_paths": "C:\\\\Users"}',
            '{"startup_paths": [1, {"x": 2}]}',
        ],
    )
    def test_import_rejects_malformed(self, settings_dir, text):
        service = UserSettingsService(settings_dir)
        service.update(theme="dark")

        with pytest.raises(SourceImportError) as exc_info:
            service.import_settings(text)

        assert exc_info.value.entry_name == "user_settings.json"
        assert service.load().theme == "dark"
        assert UserSettingsService(settings_dir).load().theme == "dark"


# -- BundlesSettingsService ----------------------------------------------------


class TestBundlesSettingsService:
    def test_empty_by_default(self, settings_dir):
        assert BundlesSettingsService(settings_dir).load() == {}

    def test_add_and_remove(self, settings_dir):
        service = BundlesSettingsService(settings_dir)
        assert service.add_bundle("Work") is True
        assert service.add_bundle("Work") is False
        assert service.add_item("Work", "C:\\a.txt") is True
        assert service.add_item("Work", "C:\\a.txt") is False
        assert service.load() == {"Work": ["C:\\a.txt"]}
        assert service.remove_bundle("Work") is True
        assert service.remove_bundle("Work") is False

    def test_export_import(self, settings_dir, tmp_path):
        source = BundlesSettingsService(settings_dir)
        source.add_item("Photos", "D:\\Pictures")
        target = BundlesSettingsService(tmp_path)
        target.import_settings(source.export_settings())
        assert target.load() == {"Photos": ["D:\\Pictures"]}

    @pytest.mark.parametrize("text", ["[]", '{"Work": "C:\\\\a"}', '{"Work": [1]}', "{"])
    def test_import_rejects_malformed(self, settings_dir, text):
        service = BundlesSettingsService(settings_dir)
        service.add_bundle("Keep")
        with pytest.raises(SourceImportError):
            service.import_settings(text)
        assert service.load() == {"Keep": []}


# -- FileTagsSettingsService / FileTagsDatabase ---------------------------------


class TestFileTags:
    def test_add_get_remove(self, settings_dir):
        service = FileTagsSettingsService(settings_dir)
        tag = service.add_tag("Urgent", "#FF0000")
        assert service.get_tag(tag.uid) == tag
        assert service.remove_tag(tag.uid) is True
        assert service.remove_tag(tag.uid) is False
        assert service.get_tag(tag.uid) is None

    def test_export_import(self, settings_dir, tmp_path):
        source = FileTagsSettingsService(settings_dir)
        source.add_tag("Home")
        target = FileTagsSettingsService(tmp_path)
        target.import_settings(source.export_settings())
        assert target.load() == source.load()

    @pytest.mark.parametrize("text", ["{}", '[{"name": "no uid"}]', "[1]", "nope"])
    def test_import_rejects_malformed(self, settings_dir, text):
        service = FileTagsSettingsService(settings_dir)
        service.add_tag("Keep")
        with pytest.raises(SourceImportError):
            service.import_settings(text)
        assert [t.name for t in service.load()] == ["Keep"]

    def test_database_file_created_on_open(self, settings_dir):
        db = FileTagsDatabase(settings_dir)
        assert db.path.exists()
        assert json.loads(db.path.read_text()) == {}

    def test_database_set_and_query(self, settings_dir):
        db = FileTagsDatabase(settings_dir)
        db.set_tags("C:\\a.txt", ["t1", "t2"])
        db.set_tags("C:\\b.txt", ["t2"])
        assert db.get_tags("C:\\a.txt") == ["t1", "t2"]
        assert sorted(db.files_with_tag("t2")) == ["C:\\a.txt", "C:\\b.txt"]
        db.set_tags("C:\\a.txt", [])
        assert db.get_tags("C:\\a.txt") == []

    def test_database_text_export_import(self, settings_dir, tmp_path):
        source = FileTagsDatabase(settings_dir)
        source.set_tags("C:\\a.txt", ["t1"])
        target = FileTagsDatabase(tmp_path)
        target.import_text(source.export_text())
        assert target.get_tags("C:\\a.txt") == ["t1"]

    def test_database_validate_bytes(self, settings_dir):
        db = FileTagsDatabase(settings_dir)
        db.validate_bytes(b'{"C:\\\\a.txt": ["t1"]}')
        with pytest.raises(SourceImportError):
            db.validate_bytes(b"\xff\xfe garbage")
        with pytest.raises(SourceImportError):
            db.validate_bytes(b'{"C:\\\\a.txt": "t1"}')


# -- SidebarPinnedController ---------------------------------------------------


class TestSidebarPinnedController:
    def test_file_created_on_open(self, settings_dir):
        controller = SidebarPinnedController(settings_dir)
        assert controller.json_file_name == "PinnedItems.json"
        assert controller.path.read_text(encoding="utf-8").strip() == "[]"
        assert controller.items == []

    def test_add_remove_persist(self, settings_dir):
        controller = SidebarPinnedController(settings_dir)
        assert controller.add_item("C:\\Foo") is True
        assert controller.add_item("C:\\Foo") is False
        controller.add_item("C:\\Bar", index=0)
        assert SidebarPinnedController(settings_dir).items == ["C:\\Bar", "C:\\Foo"]
        assert controller.remove_item("C:\\Bar") is True
        assert controller.remove_item("C:\\Bar") is False

    def test_reload_picks_up_replaced_file(self, settings_dir):
        controller = SidebarPinnedController(settings_dir)
        controller.add_item("C:\\Old")
        seen = []
        controller.on_changed(seen.append)

        controller.path.write_text('["C:\\\\New"]', encoding="utf-8")
        assert controller.items == ["C:\\Old"]

        assert controller.reload() == ["C:\\New"]
        assert controller.items == ["C:\\New"]
        assert seen == [["C:\\New"]]

    def test_failing_callback_does_not_break_reload(self, settings_dir):
        controller = SidebarPinnedController(settings_dir)

        def boom(items):
            raise RuntimeError("listener bug")

        controller.on_changed(boom)
        assert controller.reload() == []


# -- TerminalController --------------------------------------------------------


class TestTerminalController:
    def test_defaults_written_on_open(self, settings_dir):
        controller = TerminalController(settings_dir)
        assert controller.path.exists()
        assert controller.terminals
        assert controller.default_terminal == controller.terminals[0]

    def test_add_set_default_remove(self, settings_dir):
        from files_settings.storage import Terminal

        controller = TerminalController(settings_dir)
        assert controller.add_terminal(Terminal(name="Alacritty", path="alacritty")) is True
        assert controller.add_terminal(Terminal(name="Alacritty", path="other")) is False
        assert controller.set_default("Alacritty") is True
        assert controller.set_default("Missing") is False
        assert controller.default_terminal.name == "Alacritty"

        assert controller.remove_terminal("Alacritty") is True
        assert controller.default_terminal is not None
        assert controller.default_terminal.name != "Alacritty"

    def test_validate_bytes(self, settings_dir):
        controller = TerminalController(settings_dir)
        controller.validate_bytes(controller.path.read_bytes())
        with pytest.raises(SourceImportError):
            controller.validate_bytes(b'{"terminals": [{"nom": "x"}]}')
        with pytest.raises(SourceImportError):
            controller.validate_bytes(b"[]")
