"""Shared test fixtures for the files_settings test suite."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from files_settings.core.events import EventBus
from files_settings.storage import SettingsServices, Terminal
from files_settings.utils.async_helpers import AsyncBridge


@pytest.fixture
def settings_dir(tmp_path: Path) -> Path:
    """A settings folder that starts empty."""
    path = tmp_path / "settings"
    path.mkdir()
    return path


@pytest.fixture
def services(settings_dir: Path) -> SettingsServices:
    """Stores on a fresh settings folder, holding only defaults."""
    return SettingsServices.open(settings_dir)


def populate(services: SettingsServices) -> SettingsServices:
    """Give every store some non-default state."""
    services.user_settings.update(theme="dark", show_hidden_items=True, language="sv")
    services.bundles.add_item("Work", "C:\\Projects\\report.docx")
    services.bundles.add_item("Work", "C:\\Projects")
    services.bundles.add_bundle("Empty")
    services.pinned_items.add_item("C:\\Foo")
    services.pinned_items.add_item("D:\\Music")
    services.terminals.add_terminal(Terminal(name="WSL", path="wsl.exe"))
    services.terminals.set_default("WSL")
    tag = services.file_tags.add_tag("Important", "#FF0000")
    services.file_tags_db.set_tags("C:\\Projects\\report.docx", [tag.uid])
    return services


@pytest.fixture
def populated_services(services: SettingsServices) -> SettingsServices:
    """Stores with non-default state in every source."""
    return populate(services)


@pytest.fixture
def other_services(tmp_path: Path) -> SettingsServices:
    """Stores on a second, independent settings folder."""
    return SettingsServices.open(tmp_path / "other" / "settings")


def snapshot(directory: Path) -> dict[str, bytes]:
    """Content of every file in a folder, keyed by name."""
    return {p.name: p.read_bytes() for p in sorted(directory.iterdir()) if p.is_file()}


def write_zip(path: Path, entries: dict[str, bytes | str]) -> Path:
    """Write an archive with exactly the given entries."""
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return path


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def bridge():
    """A running async bridge, stopped after the test."""
    with AsyncBridge() as running:
        yield running
