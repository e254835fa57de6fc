"""Canonical normalization of text node trees.

Responsibilities:
- Flatten nested composites into one ordered sequence.
- Merge consecutive plain-text runs.
- Defer wrapper nodes into operators applied once their inner node resolves.
- Reuse earlier equal instances instead of keeping duplicate copies.

The traversal uses an explicit work-list instead of recursion, so deeply
nested input does not grow the call stack.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from .nodes import (
    ArgsApplied,
    Capitalize,
    Composite,
    Decapitalize,
    PlainText,
    TextNode,
)

WrapStep = Callable[[TextNode], TextNode]


@dataclass(frozen=True, slots=True)
class _WorkItem:
    """One pending node plus the wrap steps still owed to whatever it resolves to.

    `steps` are ordered outermost first and applied innermost first.
    """

    node: TextNode
    steps: tuple[WrapStep, ...] = ()

    def resolve(self, node: TextNode) -> TextNode:
        """Apply the pending wrap steps to a resolved node."""

        for step in reversed(self.steps):
            node = step(node)
        return node


def _bind_args(args: tuple[tuple[str, TextNode], ...], node: TextNode) -> TextNode:
    """Wrap step for argument binding."""

    return ArgsApplied(node, args)


def _wrap_step(wrapper: TextNode) -> WrapStep:
    """Return the wrap step that rebuilds `wrapper` around a resolved node."""

    if isinstance(wrapper, Capitalize):
        return Capitalize
    if isinstance(wrapper, Decapitalize):
        return Decapitalize
    if isinstance(wrapper, ArgsApplied):
        return partial(_bind_args, wrapper.args)
    raise TypeError(f"Not a wrapper node: {wrapper!r}.")


class TextNormalizer:
    """Rewrite text trees into their canonical flattened form.

    The result is idempotent: normalizing an already normalized tree returns
    the same instance.
    """

    def normalize(self, node: TextNode) -> TextNode:
        """Return the canonical form of `node`.

        When the canonical form is structurally equal to the input (after
        singleton unwrapping), the input instance itself is returned.
        """

        root = self._unwrap_singletons(node)
        output: list[TextNode] = []
        work: deque[_WorkItem] = deque([_WorkItem(root)])

        while work:
            item = work.popleft()
            current = item.node

            if isinstance(current, Composite):
                self._splice(work, item)
                continue

            if isinstance(current, PlainText) and not item.steps:
                merged = self._merge_plain_run(work, current)
                if merged.text:
                    self._emit(output, merged, item)
                continue

            duplicate = self._find_duplicate(output, current)
            if duplicate is not None:
                output.append(item.resolve(duplicate))
                continue

            if isinstance(current, (Capitalize, Decapitalize, ArgsApplied)):
                work.appendleft(_WorkItem(current.inner, item.steps + (_wrap_step(current),)))
                continue

            output.append(item.resolve(current))

        result = self._collapse(output)
        if result == root:
            return root
        return result

    @staticmethod
    def _unwrap_singletons(node: TextNode) -> TextNode:
        """Unwrap composites whose only child is another composite."""

        while (
            isinstance(node, Composite)
            and len(node.children) == 1
            and isinstance(node.children[0], Composite)
        ):
            node = node.children[0]
        return node

    @staticmethod
    def _splice(work: deque[_WorkItem], item: _WorkItem) -> None:
        """Replace a composite entry with its children, propagating pending steps."""

        children = item.node.children
        work.extendleft(_WorkItem(child, item.steps) for child in reversed(children))

    def _merge_plain_run(self, work: deque[_WorkItem], first: PlainText) -> PlainText:
        """Greedily merge plain text waiting at the front of the work-list.

        Composites met at the front are spliced in place so that runs split
        only by nesting still merge. Plain text carrying wrap steps ends the run.
        """

        pieces = [first.text]
        while work:
            front = work[0]
            if isinstance(front.node, Composite):
                work.popleft()
                self._splice(work, front)
                continue
            if isinstance(front.node, PlainText) and not front.steps:
                pieces.append(front.node.text)
                work.popleft()
                continue
            break

        if len(pieces) == 1:
            return first
        return PlainText("".join(pieces))

    def _emit(self, output: list[TextNode], node: TextNode, item: _WorkItem) -> None:
        """Append `node`, reusing an earlier equal instance when one exists."""

        duplicate = self._find_duplicate(output, node)
        output.append(item.resolve(duplicate if duplicate is not None else node))

    @staticmethod
    def _find_duplicate(output: list[TextNode], node: TextNode) -> TextNode | None:
        """Return an earlier output entry equal to `node` but not the same instance."""

        for candidate in output:
            if candidate is not node and candidate == node:
                return candidate
        return None

    @staticmethod
    def _collapse(output: list[TextNode]) -> TextNode:
        """Build the result node from the output sequence."""

        if len(output) == 1:
            return output[0]
        return Composite(tuple(output))


_DEFAULT_NORMALIZER = TextNormalizer()


def normalize(node: TextNode) -> TextNode:
    """Return the canonical form of `node` using the shared normalizer."""

    return _DEFAULT_NORMALIZER.normalize(node)
