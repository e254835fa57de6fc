"""Operators over resolved localization alternatives.

A localizable placeholder may resolve to several alternatives. These operators
decide how that list is turned into the components that are finally rendered:
joined with a separator, reduced to one element, or chained.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .nodes import PlainText, TextNode, single

LocalizedOperator = Callable[[list[TextNode]], list[TextNode]]


@dataclass(frozen=True, slots=True)
class Join:
    """Insert `separator` between consecutive alternatives."""

    separator: TextNode

    def __call__(self, components: list[TextNode]) -> list[TextNode]:
        if len(components) <= 1:
            return list(components)
        joined: list[TextNode] = []
        for index, component in enumerate(components):
            if index:
                joined.append(self.separator)
            joined.append(component)
        return joined


@dataclass(frozen=True, slots=True)
class Extract:
    """Keep only the alternative at `index`."""

    index: int

    def __call__(self, components: list[TextNode]) -> list[TextNode]:
        return [components[self.index]]


@dataclass(frozen=True, slots=True)
class Chain:
    """Apply `first`, then `then`."""

    first: LocalizedOperator
    then: LocalizedOperator

    def __call__(self, components: list[TextNode]) -> list[TextNode]:
        return self.then(self.first(components))


def join(separator: object) -> Join:
    """Return an operator that inserts `separator` between alternatives."""

    return Join(single(separator))


def line_jump() -> Join:
    """Return an operator that puts each alternative on its own line."""

    return Join(PlainText("\n"))


def extract(index: int) -> Extract:
    """Return an operator that keeps the alternative at `index`."""

    return Extract(index)
