"""Serialization of text trees into the annotated string form.

`serialize` is the partial inverse of `parse`. Wrapper nodes (capitalize,
decapitalize, argument binding, localized-list mapping) have no textual form:
only their inner node is written. A localizable node's locale tag is dropped
for the same reason.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from ..errors import UnsupportedComponentError
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
)
from .palette import code_for
from .parser import BRACE_CLOSE, BRACE_OPEN, ESCAPE, Sigil, is_name_char

_PLAIN_ESCAPES = frozenset({ESCAPE, "$", "#", "&"})


@dataclass(frozen=True, slots=True)
class _NameSegment:
    """A sigil plus an escaped name, delimited once the following text is known."""

    sigil: Sigil
    name: str

    def render(self, following: str | None) -> str:
        """Render the segment, bracing the name when `following` would extend it."""

        if following is not None and (
            following == ESCAPE or is_name_char(following, self.sigil)
        ):
            return f"{self.sigil.value}{BRACE_OPEN}{self.name}{BRACE_CLOSE}"
        return f"{self.sigil.value}{self.name}"


def serialize(node: TextNode) -> str:
    """Write `node` in the annotated string form.

    Raises:
        UnsupportedComponentError: If a color or style has no code, or the
            node type has no textual form.
    """

    segments: list[str | _NameSegment] = []
    for leaf in _iter_leaves(node):
        if isinstance(leaf, PlainText):
            segments.append(_escape(leaf.text, _PLAIN_ESCAPES))
        elif isinstance(leaf, Variable):
            segments.append(
                _NameSegment(Sigil.VARIABLE, _escape_name(leaf.name, Sigil.VARIABLE))
            )
        elif isinstance(leaf, Localizable):
            segments.append(
                _NameSegment(Sigil.LOCALIZABLE, _escape_name(leaf.path, Sigil.LOCALIZABLE))
            )
        elif isinstance(leaf, (Color, Style)):
            code = code_for(leaf)
            if code is None:
                raise UnsupportedComponentError(leaf)
            segments.append(Sigil.FORMAT.value + code)
        else:
            raise UnsupportedComponentError(leaf)

    parts: list[str] = []
    for index, segment in enumerate(segments):
        if isinstance(segment, _NameSegment):
            parts.append(segment.render(_first_character(segments, index + 1)))
        else:
            parts.append(segment)
    return "".join(parts)


def _iter_leaves(node: TextNode) -> Iterator[TextNode]:
    """Yield serializable leaves depth-first, unwrapping wrapper nodes."""

    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Composite):
            stack.extend(reversed(current.children))
        elif isinstance(current, (Capitalize, Decapitalize, ArgsApplied)):
            stack.append(current.inner)
        elif isinstance(current, MapLocalized):
            stack.append(current.localizable)
        else:
            yield current


def _first_character(segments: list[str | _NameSegment], start: int) -> str | None:
    """Return the first character written after position `start`, if any."""

    for segment in segments[start:]:
        if isinstance(segment, _NameSegment):
            return segment.sigil.value
        if segment:
            return segment[0]
    return None


def _escape(text: str, escaped: frozenset[str]) -> str:
    """Prefix every character of `escaped` with a backslash."""

    return "".join(ESCAPE + character if character in escaped else character for character in text)


def _escape_name(name: str, sigil: Sigil) -> str:
    """Escape every character that would otherwise end a name opened by `sigil`."""

    return "".join(
        character if is_name_char(character, sigil) else ESCAPE + character
        for character in name
    )
