"""Well-known names shared by the settings stores and the bundle archive."""

APP_NAME = "Files"
APP_DATA_DIR_NAME = "FilesSettings"

# Environment override for the application data directory
APP_DATA_ENV_VAR = "FILES_SETTINGS_HOME"


class LocalSettings:
    """File names inside the local settings folder.

    Each name doubles as the archive entry name for its store.
    """

    SETTINGS_FOLDER_NAME = "settings"
    LOGS_FOLDER_NAME = "logs"
    LOG_FILE_NAME = "files_settings.log"

    USER_SETTINGS_FILE_NAME = "user_settings.json"
    BUNDLES_SETTINGS_FILE_NAME = "bundles.json"
    FILE_TAG_SETTINGS_FILE_NAME = "filetags.json"
    FILE_TAGS_DB_FILE_NAME = "filetags.db"
    PINNED_ITEMS_FILE_NAME = "PinnedItems.json"
    TERMINAL_FILE_NAME = "terminal.json"


ARCHIVE_SUFFIX = ".zip"
ARCHIVE_FILE_TYPES = [("Zip File", "*.zip")]


def suggested_export_name(version: str) -> str:
    """Default file name offered by the export save picker."""
    return f"{APP_NAME}_{version}{ARCHIVE_SUFFIX}"


FEEDBACK_LINKS = {
    "ReleaseNotes": "https://github.com/files-community/Files/releases",
    "Documentation": "https://files.community/docs",
    "Contributors": "https://github.com/files-community/Files/graphs/contributors",
    "PrivacyPolicy": "https://github.com/files-community/Files/blob/main/Privacy.md",
    "SupportUs": "https://github.com/sponsors/yaichenbaum",
}

REPORT_ISSUE_URL = "https://github.com/files-community/Files/issues/new/choose"
