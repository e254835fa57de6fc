"""Locale catalogs and text rendering.

This package resolves localizable placeholders against YAML-backed locale
catalogs and renders text trees into plain strings.
"""

from .catalog import LocaleCatalog
from .localizer import FORMATTERS, TextLocalizer

__all__ = ["FORMATTERS", "LocaleCatalog", "TextLocalizer"]
