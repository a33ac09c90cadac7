"""Location of the local application data directory."""

from pathlib import Path
from typing import Optional
import os

from ..core.constants import APP_DATA_DIR_NAME, APP_DATA_ENV_VAR, LocalSettings


def get_app_data_dir(app_name: str = APP_DATA_DIR_NAME) -> Path:
    """Get the appropriate application data directory for the platform."""
    override = os.environ.get(APP_DATA_ENV_VAR)
    if override:
        return Path(override)

    if os.name == "nt":  # Windows
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:  # Linux/Mac
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

    return base / app_name


def get_settings_dir(app_data_dir: Optional[Path] = None) -> Path:
    """Get the folder that holds every settings file."""
    return (app_data_dir or get_app_data_dir()) / LocalSettings.SETTINGS_FOLDER_NAME


def get_logs_dir(app_data_dir: Optional[Path] = None) -> Path:
    """Get the folder that holds the application log."""
    return (app_data_dir or get_app_data_dir()) / LocalSettings.LOGS_FOLDER_NAME
