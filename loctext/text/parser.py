"""Single-pass parser for the annotated string form.

Grammar:
- `$name` is a variable, `#a.b.c` a localizable path, `&x` a one-character
  color or style code.
- `{` right after a sigil and a matching `}` delimit the name explicitly.
- `\\` escapes the next character.

The parser is total: every input string yields a tree. Incomplete sigils are
kept as literal text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .nodes import Composite, Localizable, PlainText, TextNode, Variable
from .normalizer import normalize
from .palette import node_for_code

ESCAPE = "\\"
BRACE_OPEN = "{"
BRACE_CLOSE = "}"


class Sigil(str, Enum):
    """Accumulation kinds, valued by their sigil character."""

    VARIABLE = "$"
    LOCALIZABLE = "#"
    FORMAT = "&"


_SIGILS = {sigil.value: sigil for sigil in Sigil}


def is_name_char(character: str, sigil: Sigil) -> bool:
    """Return whether `character` continues a name opened by `sigil`."""

    if character in _SIGILS:
        return False
    if character == "." and sigil is Sigil.LOCALIZABLE:
        return True
    return ("a" + character).isidentifier()


@dataclass(slots=True)
class _ParseState:
    """Mutable scan state for one `parse` call."""

    nodes: list[TextNode] = field(default_factory=list)
    buffer: list[str] = field(default_factory=list)
    sigil: Sigil | None = None
    escaped: bool = False
    braced: bool = False

    def open(self, sigil: Sigil) -> None:
        """Finish the current accumulation and start a sigil accumulation."""

        self.close()
        self.sigil = sigil

    def close(self) -> None:
        """Finish the current accumulation and append its node."""

        text = "".join(self.buffer)
        self.buffer.clear()
        sigil = self.sigil
        self.sigil = None
        self.braced = False

        if sigil is None:
            if text:
                self.nodes.append(PlainText(text))
            return

        node: TextNode | None = None
        if text:
            if sigil is Sigil.VARIABLE:
                node = Variable(text)
            elif sigil is Sigil.LOCALIZABLE:
                node = Localizable(text)
            else:
                node = node_for_code(text)
        # An empty name stays literal text; no `Variable("")` or
        # `Localizable("")` is built, even mid-string.
        if node is None:
            node = PlainText(sigil.value + text)
        self.nodes.append(node)


def parse(raw: str) -> TextNode:
    """Parse an annotated string into a normalized text tree."""

    state = _ParseState()
    for character in raw:
        if state.escaped:
            state.buffer.append(character)
            state.escaped = False
            continue

        if character == ESCAPE:
            state.escaped = True
            continue

        sigil = _SIGILS.get(character)
        if sigil is not None:
            state.open(sigil)
            continue

        if state.sigil is not None:
            if _consume_in_sigil(state, character):
                continue

        state.buffer.append(character)

    state.close()
    return normalize(Composite(tuple(state.nodes)))


def _consume_in_sigil(state: _ParseState, character: str) -> bool:
    """Handle one character while a sigil accumulation is open.

    Returns whether the character was consumed. When it was not, the
    accumulation has been closed and the character belongs to plain text.
    """

    if character == BRACE_OPEN and not state.buffer and not state.braced:
        state.braced = True
        return True

    if state.braced and character == BRACE_CLOSE:
        state.close()
        return True

    if state.sigil is Sigil.FORMAT:
        if not state.buffer:
            state.buffer.append(character)
            if not state.braced:
                state.close()
            return True
        state.close()
        return False

    if is_name_char(character, state.sigil):
        state.buffer.append(character)
        return True

    state.close()
    return False
