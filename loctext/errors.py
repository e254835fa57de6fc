"""Domain exceptions for text construction, serialization, and CLI diagnostics."""

from __future__ import annotations


class InvalidChannelValueError(ValueError):
    """Raised when a color channel is outside its allowed range."""

    def __init__(self, channel: str, value: object, allowed: str) -> None:
        """Initialize a channel-scoped validation error."""

        super().__init__(f"{channel} value must be between {allowed}, got {value!r}.")
        self.channel = channel
        self.value = value


class UnsupportedComponentError(TypeError):
    """Raised when a node cannot be represented in the annotated string form."""

    def __init__(self, component: object) -> None:
        """Initialize the error with the offending component."""

        super().__init__(f"Cannot serialize component: {component!r}.")
        self.component = component


class MissingLocaleError(LookupError):
    """Raised when a text node requires a locale that is not registered."""

    def __init__(self, locale: str) -> None:
        """Initialize the error with the missing locale name."""

        super().__init__(f"Locale `{locale}` is not registered.")
        self.locale = locale


class CommandStageError(RuntimeError):
    """Raised when a specific CLI command stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped command error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint
