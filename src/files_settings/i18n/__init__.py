"""Internationalization (i18n) module for the settings pages."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_I18N_DIR = Path(__file__).parent
_LANGUAGE_NAMES = {"en": "English", "sv": "Svenska"}


class Translator:
    """Simple JSON-based translation system."""

    _translations: dict = {}
    _language: str = ""
    _initialized: bool = False

    @classmethod
    def initialize(cls, language: str) -> None:
        """Initialize the translator with a language.

        Unknown or unreadable languages fall back to English.

        Args:
            language: Language code ("en" or "sv")
        """
        if cls._language == language and cls._initialized:
            return

        lang_file = _I18N_DIR / f"{language}.json"
        try:
            with open(lang_file, "r", encoding="utf-8") as f:
                translations = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load translations for '{language}': {e}")
            if language != "en":
                cls.initialize("en")
            return

        cls._language = language
        cls._translations = translations
        cls._initialized = True
        logger.info(f"Loaded translations for '{language}'")

    @classmethod
    def get(cls, key: str, **kwargs) -> str:
        """Get a translated string.

        Args:
            key: Translation key
            **kwargs: Format arguments for the string

        Returns:
            Translated string, or key if not found
        """
        text = cls._translations.get(key, key) if cls._initialized else key

        if kwargs:
            try:
                text = text.format(**kwargs)
            except (KeyError, ValueError):
                pass

        return text

    @classmethod
    def get_language(cls) -> str:
        """Get the current language code."""
        return cls._language

    @classmethod
    def get_available_languages(cls) -> list[tuple[str, str]]:
        """Get (code, name) pairs for every shipped translation file."""
        codes = sorted(p.stem for p in _I18N_DIR.glob("*.json"))
        return [(code, _LANGUAGE_NAMES.get(code, code)) for code in codes]


def _(key: str, **kwargs) -> str:
    """Shortcut function for getting translations."""
    return Translator.get(key, **kwargs)


def init_translator(language: str) -> None:
    """Initialize the translator with a language."""
    Translator.initialize(language)


def get_language() -> str:
    return Translator.get_language()


def get_available_languages() -> list[tuple[str, str]]:
    return Translator.get_available_languages()
