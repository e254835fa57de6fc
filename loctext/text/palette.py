"""Fixed color/style code table for the annotated string form.

Codes are single characters following `&`: `0`-`9` and `a`-`f` name sixteen
colors, `k`-`o` name the single-flag styles, and `r` resets both color and
style.
"""

from __future__ import annotations

from .nodes import Color, Style, TextNode

BLACK = Color.create("black", 0, 0, 0)
DARK_BLUE = Color.create("dark_blue", 0, 0, 170)
DARK_GREEN = Color.create("dark_green", 0, 170, 0)
DARK_AQUA = Color.create("dark_aqua", 0, 170, 170)
DARK_RED = Color.create("dark_red", 170, 0, 0)
DARK_PURPLE = Color.create("dark_purple", 170, 0, 170)
GOLD = Color.create("gold", 255, 170, 0)
GRAY = Color.create("gray", 170, 170, 170)
DARK_GRAY = Color.create("dark_gray", 85, 85, 85)
BLUE = Color.create("blue", 85, 85, 255)
GREEN = Color.create("green", 85, 255, 85)
AQUA = Color.create("aqua", 85, 255, 255)
RED = Color.create("red", 255, 85, 85)
LIGHT_PURPLE = Color.create("light_purple", 255, 85, 255)
YELLOW = Color.create("yellow", 255, 255, 85)
WHITE = Color.create("white", 255, 255, 255)
RESET_COLOR = Color.create("reset", 0, 0, 0, 0.0)

OBFUSCATED = Style.of(obfuscated=True)
BOLD = Style.of(bold=True)
STRIKETHROUGH = Style.of(strikethrough=True)
UNDERLINE = Style.of(underline=True)
ITALIC = Style.of(italic=True)
RESET_STYLE = Style.of()

RESET_CODE = "r"

COLOR_CODES: dict[str, Color] = {
    "0": BLACK,
    "1": DARK_BLUE,
    "2": DARK_GREEN,
    "3": DARK_AQUA,
    "4": DARK_RED,
    "5": DARK_PURPLE,
    "6": GOLD,
    "7": GRAY,
    "8": DARK_GRAY,
    "9": BLUE,
    "a": GREEN,
    "b": AQUA,
    "c": RED,
    "d": LIGHT_PURPLE,
    "e": YELLOW,
    "f": WHITE,
}

STYLE_CODES: dict[str, Style] = {
    "k": OBFUSCATED,
    "l": BOLD,
    "m": STRIKETHROUGH,
    "n": UNDERLINE,
    "o": ITALIC,
}

# `&r` parses to the reset style; both reset nodes serialize to `r`.
_NODES_BY_CODE: dict[str, TextNode] = {**COLOR_CODES, **STYLE_CODES, RESET_CODE: RESET_STYLE}
_CODES_BY_NODE: dict[TextNode, str] = {
    **{node: code for code, node in COLOR_CODES.items()},
    **{node: code for code, node in STYLE_CODES.items()},
    RESET_COLOR: RESET_CODE,
    RESET_STYLE: RESET_CODE,
}


def node_for_code(code: str) -> TextNode | None:
    """Return the color or style node for a one-character code."""

    return _NODES_BY_CODE.get(code)


def code_for(node: TextNode) -> str | None:
    """Return the code for a color or style node, matching colors by channels."""

    if not isinstance(node, (Color, Style)):
        return None
    return _CODES_BY_NODE.get(node)
