"""Shared parsing helpers for configuration and CLI values."""

from __future__ import annotations


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_assignment(token: str, field_name: str) -> tuple[str, str]:
    """Split a `NAME=VALUE` token into its stripped name and raw value.

    The value keeps surrounding whitespace so templates can start or end with
    spaces.

    Raises:
        ValueError: If the token has no `=` or the name is blank.
    """

    name, separator, value = token.partition("=")
    normalized_name = normalize_optional_string(name)
    if not separator or normalized_name is None:
        raise ValueError(f"`{field_name}` entries must use the `NAME=VALUE` form, got `{token}`.")
    return normalized_name, value


def parse_choice(value: object, choices: frozenset[str], field_name: str) -> str:
    """Return the lower-cased token when it is one of `choices`.

    Raises:
        ValueError: If the value is blank or not an accepted choice.
    """

    normalized = normalize_optional_string(value)
    token = normalized.lower() if normalized is not None else ""
    if token not in choices:
        accepted = ", ".join(f"`{choice}`" for choice in sorted(choices))
        raise ValueError(f"`{field_name}` must be one of {accepted}.")
    return token
