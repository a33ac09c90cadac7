"""Files settings: About page and settings bundle export/import."""

__version__ = "1.4.2"
