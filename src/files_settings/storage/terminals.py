"""Terminal profiles offered by the "Open in terminal" command."""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional
import logging
import os

from ..core.constants import LocalSettings
from .base import JsonFileStore

logger = logging.getLogger(__name__)


@dataclass
class Terminal:
    """A terminal application the user can launch in a folder."""

    name: str
    path: str
    arguments: str = ""
    icon: str = ""


def default_terminals() -> list[Terminal]:
    """Terminals available on a fresh installation."""
    if os.name == "nt":
        return [
            Terminal(name="CMD", path="cmd.exe", arguments='/k "cd /d {0} && title Command Prompt"'),
            Terminal(name="PowerShell", path="powershell.exe", arguments='-noexit -command "cd \'{0}\'"'),
        ]
    return [Terminal(name="Terminal", path="x-terminal-emulator", arguments="--working-directory={0}")]


class TerminalController(JsonFileStore):
    """Terminal profiles stored in ``terminal.json``.

    The document holds the profile list and the name of the default one.
    """

    file_name = LocalSettings.TERMINAL_FILE_NAME

    def __init__(self, settings_dir: Path):
        super().__init__(settings_dir)
        self.ensure_exists()

    def _default(self) -> dict:
        terminals = default_terminals()
        return {"terminals": [asdict(t) for t in terminals], "default": terminals[0].name}

    def _validate(self, data):
        if not isinstance(data, dict) or not isinstance(data.get("terminals"), list):
            raise TypeError("terminal profiles must be an object with a 'terminals' list")
        for item in data["terminals"]:
            Terminal(**item)
        return data

    @property
    def terminals(self) -> list[Terminal]:
        """Get all configured terminals."""
        return [Terminal(**item) for item in self.load_raw()["terminals"]]

    @property
    def default_terminal(self) -> Optional[Terminal]:
        """Get the default terminal, falling back to the first one."""
        data = self.load_raw()
        terminals = [Terminal(**item) for item in data["terminals"]]
        for terminal in terminals:
            if terminal.name == data.get("default"):
                return terminal
        return terminals[0] if terminals else None

    def add_terminal(self, terminal: Terminal) -> bool:
        """Add a terminal profile. Return False if the name is taken."""
        data = self.load_raw()
        if any(item["name"] == terminal.name for item in data["terminals"]):
            return False
        data["terminals"].append(asdict(terminal))
        self.save_raw(data)
        return True

    def remove_terminal(self, name: str) -> bool:
        data = self.load_raw()
        remaining = [item for item in data["terminals"] if item["name"] != name]
        if len(remaining) == len(data["terminals"]):
            return False
        data["terminals"] = remaining
        if data.get("default") == name:
            data["default"] = remaining[0]["name"] if remaining else None
        self.save_raw(data)
        return True

    def set_default(self, name: str) -> bool:
        data = self.load_raw()
        if not any(item["name"] == name for item in data["terminals"]):
            logger.warning(f"Unknown terminal: {name}")
            return False
        data["default"] = name
        self.save_raw(data)
        return True
