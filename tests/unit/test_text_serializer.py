"""Unit tests for the annotated string serializer."""

from __future__ import annotations

import pytest

from loctext.errors import UnsupportedComponentError
from loctext.text.nodes import (
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
from loctext.text.operators import join
from loctext.text.palette import BOLD, GREEN, RESET_COLOR, RESET_STYLE
from loctext.text.parser import parse
from loctext.text.serializer import serialize


@pytest.mark.parametrize(
    "raw",
    [
        "Welcome $user, #greet.morning &a",
        "&lBold&r text",
        "${name}s and #{menu}.title",
        "$a#b&c",
        "plain text only",
    ],
)
def test_serialize_reproduces_parsed_input(raw: str) -> None:
    """Serializing a parsed template should reproduce the canonical input."""

    assert serialize(parse(raw)) == raw


def test_serialize_escapes_sigils_in_plain_text() -> None:
    """Plain text sigils and backslashes should be escaped."""

    assert serialize(PlainText("100% $5 & #1")) == r"100% \$5 \& \#1"
    assert serialize(PlainText("a\\b")) == r"a\\b"
    assert parse(serialize(PlainText("$x & \\"))) == PlainText("$x & \\")


def test_serialize_braces_names_followed_by_name_characters() -> None:
    """Names should be braced only when the next character would extend them."""

    assert serialize(Composite((Variable("name"), PlainText("s")))) == "${name}s"
    assert serialize(Composite((Variable("name"), PlainText(".")))) == "$name."
    assert serialize(Composite((Localizable("menu"), PlainText(".x")))) == "#{menu}.x"
    assert serialize(Composite((Variable("a"), Variable("b")))) == "$a$b"


def test_serialize_unwraps_wrapper_nodes() -> None:
    """Wrappers have no textual form, so only their inner node is written."""

    tree = Composite(
        (
            Capitalize(Variable("a")),
            Decapitalize(PlainText(" b ")),
            ArgsApplied(Variable("c"), {"c": "ignored"}),
            MapLocalized(Localizable("d.e", "pt_br"), join(",")),
        )
    )

    assert serialize(tree) == "$a b $c#d.e"


def test_serialize_writes_format_codes() -> None:
    """Colors and styles should use their one-character codes."""

    assert serialize(Composite((GREEN, BOLD, RESET_COLOR, RESET_STYLE))) == "&a&l&r&r"


@pytest.mark.parametrize(
    "node",
    [
        Color("teal", 0, 128, 128),
        Style.of(bold=True, underline=True),
        Composite((PlainText("a"), Color("custom", 1, 2, 3))),
    ],
)
def test_serialize_rejects_nodes_without_codes(node: TextNode) -> None:
    """Colors and styles missing from the code table cannot be serialized."""

    with pytest.raises(UnsupportedComponentError) as exc_info:
        serialize(node)

    assert isinstance(exc_info.value.component, (Color, Style))


def test_serialize_braces_names_followed_by_escaped_text() -> None:
    """An escaped character after a name would extend it, so the name is braced."""

    tree = Composite((Variable("user"), PlainText("#1 wins")))

    assert serialize(tree) == r"${user}\#1 wins"
    assert parse(serialize(tree)) == tree


def test_serialize_escapes_characters_that_would_end_a_name() -> None:
    """Name characters outside the name alphabet should be escaped."""

    assert serialize(Variable("a b")) == r"$a\ b"
    assert serialize(Variable("a#b")) == r"$a\#b"
    assert serialize(Localizable("x$y")) == r"#x\$y"
    assert serialize(Localizable("menu.title")) == "#menu.title"


@pytest.mark.parametrize(
    "tree",
    [
        Composite((Variable("user"), PlainText("#1 wins"))),
        Composite((Localizable("."), PlainText("$."))),
        Variable("a b"),
        Variable("a#b"),
        Composite((Localizable("x$y"), PlainText("&z"))),
        Composite((Variable("a"), PlainText("\\tail"))),
        parse("#.$."),
        parse(r"$a\ b"),
    ],
)
def test_parse_restores_serialized_tree(tree: TextNode) -> None:
    """Parsing the serialized form of a normalized tree should give the same tree."""

    assert parse(serialize(tree)) == tree
