"""View-models behind the settings pages."""

from .about import AboutViewModel

__all__ = ["AboutViewModel"]
