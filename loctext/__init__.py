"""Top-level package for loctext.

This package provides an immutable node algebra for templated, localizable,
styled text: an annotated string codec, a canonical normalizer, and a
catalog-backed renderer. The main entry points are `parse`, `serialize`,
`normalize`, and `TextLocalizer`.
"""

from .localization import LocaleCatalog, TextLocalizer
from .text import normalize, parse, serialize

__all__ = [
    "LocaleCatalog",
    "TextLocalizer",
    "__version__",
    "normalize",
    "parse",
    "serialize",
]

__version__ = "0.1.0"
