"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
text tree dumps, and locale catalog summaries.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import CommandStageError
from .localization.catalog import LocaleCatalog
from .text.nodes import (
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

_STYLE_FLAGS = ("obfuscated", "bold", "strikethrough", "underline", "italic")


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, CommandStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def describe_node(node: TextNode) -> str:
    """Return a one-line label for a node, without its children."""

    if isinstance(node, PlainText):
        return f"PlainText {node.text!r}"
    if isinstance(node, Variable):
        return f"Variable {node.name}"
    if isinstance(node, Localizable):
        suffix = f" locale={node.locale}" if node.locale is not None else ""
        return f"Localizable {node.path}{suffix}"
    if isinstance(node, MapLocalized):
        return f"MapLocalized {node.localizable.path}"
    if isinstance(node, Color):
        return f"Color {node.name} rgba=({node.r},{node.g},{node.b},{node.alpha:g})"
    if isinstance(node, Style):
        flags = [flag for flag in _STYLE_FLAGS if getattr(node, flag)]
        return f"Style {','.join(flags) if flags else 'reset'}"
    if isinstance(node, ArgsApplied):
        names = ",".join(name for name, _ in node.args)
        return f"ArgsApplied args={names or '-'}"
    return type(node).__name__


def tree_lines(node: TextNode) -> list[str]:
    """Return an indented depth-first dump of `node`, one node per line."""

    lines: list[str] = []
    stack: list[tuple[TextNode, int]] = [(node, 0)]
    while stack:
        current, depth = stack.pop()
        lines.append("  " * depth + describe_node(current))
        if isinstance(current, Composite):
            stack.extend((child, depth + 1) for child in reversed(current.children))
        elif isinstance(current, (Capitalize, Decapitalize, ArgsApplied)):
            stack.append((current.inner, depth + 1))
    return lines


def echo_tree(node: TextNode) -> None:
    """Print the indented tree dump of `node`."""

    for line in tree_lines(node):
        typer.echo(line)


def echo_locale_summary(catalog: LocaleCatalog) -> None:
    """Print one `locale: N path(s)` row per registered locale."""

    locales = catalog.locales()
    if not locales:
        typer.echo("No locales found.")
        return
    for locale in locales:
        count = len(catalog.paths(locale))
        typer.echo(f"{locale}: {count} path{'s' if count != 1 else ''}")
