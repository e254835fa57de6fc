"""Immutable text node algebra.

Responsibilities:
- Define the closed set of text node variants used by parser, serializer,
  normalizer, and localizer.
- Provide structural value equality and hashing for every variant.
- Intern canonical `Color` and `Style` instances in process-wide caches.

Key types:
- `TextNode`: common base with builder-style methods.
- `PlainText`, `Variable`, `Localizable`, `Color`, `Style`: leaf variants.
- `Capitalize`, `Decapitalize`, `ArgsApplied`: wrapper variants.
- `Composite`: ordered concatenation, the only variant with children.
- `MapLocalized`: localizable placeholder carrying a localized-list operator.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
import threading
from typing import TYPE_CHECKING

from ..errors import InvalidChannelValueError

if TYPE_CHECKING:
    from .operators import LocalizedOperator


_COLOR_CACHE: dict[str, Color] = {}
_STYLE_CACHE: dict[tuple[bool, bool, bool, bool, bool], Style] = {}
_CACHE_LOCK = threading.Lock()


class TextNode:
    """Base class of every text node variant."""

    __slots__ = ()

    def is_empty(self) -> bool:
        """Return whether this node renders no content."""

        return False

    def capitalize(self) -> Capitalize:
        """Wrap this node so its first rendered character is upper-cased."""

        return Capitalize(self)

    def decapitalize(self) -> Decapitalize:
        """Wrap this node so its first rendered character is lower-cased."""

        return Decapitalize(self)

    def apply(self, args: Mapping[str, object]) -> ArgsApplied:
        """Bind named arguments for variables inside this node."""

        return ArgsApplied(self, args)

    def append(self, other: object) -> TextNode:
        """Return the normalized concatenation of this node and `other`."""

        return _normalize(Composite((self, single(other))))

    def map_localized(self, operator: LocalizedOperator) -> TextNode:
        """Attach `operator` to every localizable placeholder inside this node."""

        def _attach(leaf: TextNode) -> TextNode:
            if isinstance(leaf, (Localizable, MapLocalized)):
                return leaf.map_localized(operator)
            return leaf

        return _map_leaves(self, _attach)


@dataclass(frozen=True, slots=True)
class PlainText(TextNode):
    """Literal text."""

    text: str

    def is_empty(self) -> bool:
        return not self.text


@dataclass(frozen=True, slots=True)
class Variable(TextNode):
    """Named placeholder resolved from arguments at render time."""

    name: str


@dataclass(frozen=True, slots=True)
class Localizable(TextNode):
    """Placeholder resolved from a locale catalog by dotted path.

    Attributes:
        path: Dotted localization path, for example `messages.welcome`.
        locale: Optional locale tag that pins resolution to one locale.
    """

    path: str
    locale: str | None = None

    def localize(self, locale: str | None) -> Localizable:
        """Return this placeholder pinned to `locale`."""

        if locale == self.locale:
            return self
        return replace(self, locale=locale)

    def map_localized(self, operator: LocalizedOperator) -> TextNode:
        return MapLocalized(self, operator)


@dataclass(frozen=True, slots=True)
class Color(TextNode):
    """RGBA color marker.

    Equality and hashing consider only the channels; `name` is a label for
    display and cache lookup.
    """

    name: str = field(compare=False)
    r: int
    g: int
    b: int
    alpha: float = 1.0

    def __post_init__(self) -> None:
        _check_channel("Red", self.r)
        _check_channel("Green", self.g)
        _check_channel("Blue", self.b)
        if isinstance(self.alpha, bool) or not isinstance(self.alpha, (int, float)):
            raise InvalidChannelValueError("Alpha", self.alpha, "0.0-1.0")
        if not 0.0 <= self.alpha <= 1.0:
            raise InvalidChannelValueError("Alpha", self.alpha, "0.0-1.0")
        object.__setattr__(self, "alpha", float(self.alpha))

    @classmethod
    def create(cls, name: str, r: int, g: int, b: int, alpha: float = 1.0) -> Color:
        """Return the cached color for `name`, or build one.

        The first color created for a name is cached. A later call with the
        same name but different channels returns a new, uncached instance.
        """

        with _CACHE_LOCK:
            cached = _COLOR_CACHE.get(name)
        if cached is not None and (cached.r, cached.g, cached.b, cached.alpha) == (
            r,
            g,
            b,
            alpha,
        ):
            return cached

        color = cls(name, r, g, b, alpha)
        if cached is None:
            with _CACHE_LOCK:
                color = _COLOR_CACHE.setdefault(name, color)
        return color


@dataclass(frozen=True, slots=True)
class Style(TextNode):
    """Text style flags; the all-off combination is the reset style."""

    obfuscated: bool = False
    bold: bool = False
    strikethrough: bool = False
    underline: bool = False
    italic: bool = False

    @classmethod
    def of(
        cls,
        *,
        obfuscated: bool = False,
        bold: bool = False,
        strikethrough: bool = False,
        underline: bool = False,
        italic: bool = False,
    ) -> Style:
        """Return the canonical instance for one flag combination."""

        key = (obfuscated, bold, strikethrough, underline, italic)
        with _CACHE_LOCK:
            cached = _STYLE_CACHE.get(key)
            if cached is None:
                cached = cls(*key)
                _STYLE_CACHE[key] = cached
        return cached

    @property
    def is_reset(self) -> bool:
        """Return whether every flag is off."""

        return not (
            self.obfuscated or self.bold or self.strikethrough or self.underline or self.italic
        )


@dataclass(frozen=True, slots=True)
class Capitalize(TextNode):
    """Upper-case the first rendered character of `inner`."""

    inner: TextNode


@dataclass(frozen=True, slots=True)
class Decapitalize(TextNode):
    """Lower-case the first rendered character of `inner`."""

    inner: TextNode


@dataclass(frozen=True, slots=True)
class ArgsApplied(TextNode):
    """Pending substitution of named variables inside `inner`.

    `args` accepts any mapping of names to nodes (or plain values accepted by
    `single`) and is stored as a name-sorted tuple of pairs so the node stays
    hashable.
    """

    inner: TextNode
    args: tuple[tuple[str, TextNode], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", _freeze_args(self.args))

    @property
    def arguments(self) -> dict[str, TextNode]:
        """Return bound arguments as a new dictionary."""

        return dict(self.args)


@dataclass(frozen=True, slots=True)
class Composite(TextNode):
    """Ordered concatenation of child nodes."""

    children: tuple[TextNode, ...] = ()

    def __post_init__(self) -> None:
        children = tuple(self.children)
        for child in children:
            if not isinstance(child, TextNode):
                raise TypeError(f"Composite child must be a text node, got {child!r}.")
        object.__setattr__(self, "children", children)

    def __iter__(self) -> Iterator[TextNode]:
        return iter(self.children)

    def is_empty(self) -> bool:
        pending = list(self.children)
        while pending:
            node = pending.pop()
            if isinstance(node, Composite):
                pending.extend(node.children)
            elif not node.is_empty():
                return False
        return True


@dataclass(frozen=True, slots=True)
class MapLocalized(TextNode):
    """Localizable placeholder whose resolved alternatives pass through `operator`."""

    localizable: Localizable
    operator: LocalizedOperator

    def __post_init__(self) -> None:
        if not isinstance(self.localizable, Localizable):
            raise TypeError(f"Expected a localizable node, got {self.localizable!r}.")

    def map_localized(self, operator: LocalizedOperator) -> TextNode:
        from .operators import Chain

        return MapLocalized(self.localizable, Chain(self.operator, operator))


WRAPPER_TYPES = (Capitalize, Decapitalize, ArgsApplied)


def single(value: object) -> TextNode:
    """Convert one value into a text node.

    Raises:
        TypeError: If the value is neither a node, a string, nor a number.
    """

    if isinstance(value, TextNode):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Illegal input component {value!r}.")
    if isinstance(value, (str, int, float)):
        return PlainText(str(value))
    raise TypeError(f"Illegal input component {value!r}.")


def text_of(*values: object) -> TextNode:
    """Build a normalized concatenation of `values`."""

    return _normalize(Composite(tuple(single(value) for value in values)))


def variable(name: str) -> Variable:
    """Build a variable placeholder."""

    return Variable(name)


def localizable(path: str, locale: str | None = None) -> Localizable:
    """Build a localizable placeholder."""

    return Localizable(path, locale)


def capitalize(node: object) -> Capitalize:
    """Wrap a value so its first rendered character is upper-cased."""

    return Capitalize(single(node))


def decapitalize(node: object) -> Decapitalize:
    """Wrap a value so its first rendered character is lower-cased."""

    return Decapitalize(single(node))


def _check_channel(channel: str, value: object) -> None:
    """Validate one 0-255 integer color channel."""

    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        raise InvalidChannelValueError(channel, value, "0-255")


def _freeze_args(
    args: Mapping[str, object] | Iterable[tuple[str, object]],
) -> tuple[tuple[str, TextNode], ...]:
    """Convert argument bindings into a sorted, hashable tuple of pairs."""

    items = args.items() if isinstance(args, Mapping) else args
    frozen: dict[str, TextNode] = {}
    for name, value in items:
        if not isinstance(name, str):
            raise TypeError(f"Argument names must be strings, got {name!r}.")
        frozen[name] = single(value)
    return tuple(sorted(frozen.items(), key=lambda item: item[0]))


def _map_leaves(root: TextNode, transform: Callable[[TextNode], TextNode]) -> TextNode:
    """Rebuild `root` bottom-up, replacing every non-container node via `transform`.

    Containers (composites and wrappers) are rebuilt only when a descendant
    changed; unchanged subtrees keep their identity.
    """

    results: list[TextNode] = []
    stack: list[tuple[TextNode, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if isinstance(node, Composite):
            if not expanded:
                stack.append((node, True))
                stack.extend((child, False) for child in reversed(node.children))
                continue
            split = len(results) - len(node.children)
            children = tuple(results[split:])
            del results[split:]
            unchanged = all(new is old for new, old in zip(children, node.children))
            results.append(node if unchanged else Composite(children))
        elif isinstance(node, WRAPPER_TYPES):
            if not expanded:
                stack.append((node, True))
                stack.append((node.inner, False))
                continue
            inner = results.pop()
            results.append(node if inner is node.inner else replace(node, inner=inner))
        else:
            results.append(transform(node))
    return results[0]


def _normalize(node: TextNode) -> TextNode:
    """Run the normalization engine on `node`."""

    from .normalizer import normalize

    return normalize(node)
