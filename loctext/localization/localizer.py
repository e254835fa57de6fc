"""Rendering of text trees into plain strings.

Responsibilities:
- Resolve localizable placeholders against a `LocaleCatalog` with locale
  fallback (requested, then current, then default locale, then the path).
- Substitute variables from call arguments and `ArgsApplied` bindings.
- Apply capitalize/decapitalize to the first rendered character of the
  wrapped content.
- Render color and style markers according to a formatting policy.

Rendering walks an explicit stack, so deeply nested trees do not grow the
call stack.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from loguru import logger

from ..errors import UnsupportedComponentError
from ..text.nodes import (
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
    single,
)
from ..text.operators import LocalizedOperator, line_jump
from ..text.palette import RESET_COLOR
from ..text.serializer import serialize
from .catalog import LocaleCatalog

_UPPER = "upper"
_LOWER = "lower"

_ANSI_STYLE_FLAGS = (
    ("obfuscated", "5"),
    ("bold", "1"),
    ("strikethrough", "9"),
    ("underline", "4"),
    ("italic", "3"),
)


def _strip_formatting(node: Color | Style) -> str:
    """Drop color and style markers."""

    return ""


def _format_codes(node: Color | Style) -> str:
    """Render markers as `&x` codes."""

    return serialize(node)


def _format_ansi(node: Color | Style) -> str:
    """Render markers as ANSI SGR escape sequences."""

    if isinstance(node, Color):
        if node == RESET_COLOR:
            return "\x1b[39m"
        return f"\x1b[38;2;{node.r};{node.g};{node.b}m"
    if node.is_reset:
        return "\x1b[0m"
    codes = [code for flag, code in _ANSI_STYLE_FLAGS if getattr(node, flag)]
    return "\x1b[" + ";".join(codes) + "m"


FORMATTERS: dict[str, Callable[[Color | Style], str]] = {
    "strip": _strip_formatting,
    "codes": _format_codes,
    "ansi": _format_ansi,
}


@dataclass(frozen=True, slots=True)
class _Frame:
    """One node to render with its argument scope.

    `expanding` holds the variables (`$name`) and paths (`#path`) currently
    being expanded, so self-referencing values render literally.
    """

    node: TextNode
    scope: Mapping[str, TextNode] = field(default_factory=dict)
    expanding: frozenset[str] = frozenset()

    def child(self, node: TextNode, marker: str | None = None) -> _Frame:
        """Return a frame for `node` sharing this frame's scope."""

        expanding = self.expanding if marker is None else self.expanding | {marker}
        return _Frame(node, self.scope, expanding)


@dataclass(frozen=True, slots=True)
class _CaseEnd:
    """Marks the end of a capitalize/decapitalize wrapper's content."""

    token: object


class TextLocalizer:
    """Render text trees against a locale catalog."""

    def __init__(
        self,
        catalog: LocaleCatalog,
        default_locale: str,
        locale: str | None = None,
        formatting: str = "strip",
    ) -> None:
        """Initialize the localizer.

        Args:
            catalog: Catalog providing localization alternatives.
            default_locale: Last-resort locale; must be registered.
            locale: Current locale, defaulting to `default_locale`.
            formatting: Color/style policy: `strip`, `codes`, or `ansi`.

        Raises:
            MissingLocaleError: If a locale is not registered in `catalog`.
            ValueError: If `formatting` is unknown.
        """

        if formatting not in FORMATTERS:
            supported = ", ".join(sorted(FORMATTERS))
            raise ValueError(f"Unknown formatting `{formatting}`; expected one of: {supported}.")
        self.catalog = catalog
        self.default_locale = catalog.require_locale(default_locale)
        self.locale = catalog.require_locale(locale or default_locale)
        self.formatting = formatting
        self._format = FORMATTERS[formatting]

    def localize(
        self,
        node: TextNode,
        args: Mapping[str, object] | None = None,
        locale: str | None = None,
    ) -> str:
        """Render `node` to a string.

        Args:
            node: Tree to render.
            args: Variable values; they take precedence over `ArgsApplied` bindings.
            locale: Locale overriding node and localizer locales.
        """

        if locale is not None:
            self.catalog.require_locale(locale)
        call_args = {name: single(value) for name, value in (args or {}).items()}

        parts: list[str] = []
        pending_case: tuple[str, object] | None = None
        stack: list[_Frame | _CaseEnd] = [_Frame(node)]

        while stack:
            entry = stack.pop()
            if isinstance(entry, _CaseEnd):
                if pending_case is not None and pending_case[1] is entry.token:
                    pending_case = None
                continue

            current = entry.node
            if isinstance(current, PlainText):
                text = current.text
                if text and pending_case is not None:
                    text = _apply_case(text, pending_case[0])
                    pending_case = None
                parts.append(text)
            elif isinstance(current, Composite):
                stack.extend(entry.child(child) for child in reversed(current.children))
            elif isinstance(current, (Capitalize, Decapitalize)):
                token = object()
                stack.append(_CaseEnd(token))
                stack.append(entry.child(current.inner))
                if pending_case is None:
                    mode = _UPPER if isinstance(current, Capitalize) else _LOWER
                    pending_case = (mode, token)
            elif isinstance(current, ArgsApplied):
                scope = {**entry.scope, **current.arguments}
                stack.append(_Frame(current.inner, scope, entry.expanding))
            elif isinstance(current, Variable):
                stack.append(self._expand_variable(entry, current, call_args))
            elif isinstance(current, (Localizable, MapLocalized)):
                stack.extend(reversed(self._expand_localizable(entry, current, locale)))
            elif isinstance(current, (Color, Style)):
                parts.append(self._format(current))
            else:
                raise UnsupportedComponentError(current)

        return "".join(parts)

    def localizations(
        self,
        node: TextNode,
        args: Mapping[str, object] | None = None,
        locale: str | None = None,
    ) -> list[TextNode]:
        """Return the resolved alternatives of a localizable node.

        `MapLocalized` alternatives pass through its operator. Any other node is
        returned as a one-element list. When `args` is given every alternative
        is bound to it.
        """

        if locale is not None:
            self.catalog.require_locale(locale)
        if isinstance(node, MapLocalized):
            resolved = node.operator(self._resolve(node.localizable, locale))
        elif isinstance(node, Localizable):
            resolved = self._resolve(node, locale)
        else:
            resolved = [node]
        if args:
            return [alternative.apply(args) for alternative in resolved]
        return resolved

    def _expand_variable(
        self,
        entry: _Frame,
        node: Variable,
        call_args: Mapping[str, TextNode],
    ) -> _Frame:
        """Return the frame rendering a variable's value, or its literal form."""

        marker = "$" + node.name
        value = call_args.get(node.name)
        if value is None:
            value = entry.scope.get(node.name)
        if value is None or marker in entry.expanding:
            return entry.child(PlainText(marker))
        return entry.child(value, marker)

    def _expand_localizable(
        self,
        entry: _Frame,
        node: Localizable | MapLocalized,
        locale: str | None,
    ) -> list[_Frame]:
        """Return frames rendering a localizable placeholder's alternatives in order."""

        if isinstance(node, MapLocalized):
            placeholder = node.localizable
            operator: LocalizedOperator = node.operator
        else:
            placeholder = node
            operator = line_jump()

        marker = "#" + placeholder.path
        if marker in entry.expanding:
            return [entry.child(PlainText(placeholder.path))]
        components = operator(self._resolve(placeholder, locale))
        return [entry.child(component, marker) for component in components]

    def _resolve(self, placeholder: Localizable, locale: str | None) -> list[TextNode]:
        """Look up alternatives with requested/current/default locale fallback."""

        if locale is not None:
            target = locale
        elif placeholder.locale is not None:
            target = self.catalog.require_locale(placeholder.locale)
        else:
            target = self.locale

        for candidate in (target, self.locale, self.default_locale):
            found = self.catalog.localizations(candidate, placeholder.path)
            if found:
                return found

        logger.debug(
            "Missing localization path={} locale={}; rendering path literally.",
            placeholder.path,
            target,
        )
        return [PlainText(placeholder.path)]


def _apply_case(text: str, mode: str) -> str:
    """Upper- or lower-case the first character of `text`."""

    first = text[0].upper() if mode == _UPPER else text[0].lower()
    return first + text[1:]
