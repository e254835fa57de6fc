"""Text node algebra and its parser, serializer, and normalizer.

This package provides the immutable node variants for templated, localizable,
styled text together with the annotated string codec and the canonical
normalization engine.
"""

from .nodes import (
    ArgsApplied,
    Capitalize,
    Color,
    Composite,
    Decapitalize,
    Localizable,
    MapLocalized,
    PlainText,
    Style,
    TextNode,
    Variable,
    capitalize,
    decapitalize,
    localizable,
    single,
    text_of,
    variable,
)
from .normalizer import TextNormalizer, normalize
from .operators import extract, join, line_jump
from .parser import parse
from .serializer import serialize

__all__ = [
    "ArgsApplied",
    "Capitalize",
    "Color",
    "Composite",
    "Decapitalize",
    "Localizable",
    "MapLocalized",
    "PlainText",
    "Style",
    "TextNode",
    "TextNormalizer",
    "Variable",
    "capitalize",
    "decapitalize",
    "extract",
    "join",
    "line_jump",
    "localizable",
    "normalize",
    "parse",
    "serialize",
    "single",
    "text_of",
    "variable",
]
