"""Structured command logging utilities.

Responsibilities:
- Emit concise, deterministic stage-level logs for CLI commands.
- Configure `loguru` with a plain message format on a single sink.
"""

from __future__ import annotations

from collections.abc import Callable
import sys
from typing import TextIO, TypeVar

from loguru import logger

_StageResult = TypeVar("_StageResult")


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class CommandLogger:
    """Emit deterministic stage logs for one CLI command invocation."""

    def __init__(self, command: str, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Initialize the logger sink and configure deterministic formatting."""

        self._command = command
        self._sink = sink if sink is not None else sys.stderr
        logger.remove()
        logger.add(self._sink, format="{message}", level=level.upper(), colorize=False)

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured log line."""

        line = (
            f"[stage] level={level} command={self._command} stage={stage} "
            f"event={event}{_format_context(context)}"
        )
        logger.log(level, line)

    def log_stage_start(self, stage: str, **context: object) -> None:
        """Emit a stage-start event."""

        self._emit("INFO", "start", stage, **context)

    def log_stage_complete(self, stage: str, **context: object) -> None:
        """Emit a stage-complete event."""

        self._emit("INFO", "complete", stage, **context)

    def log_stage_failure(self, stage: str, error_type: str) -> None:
        """Emit a stage-failure event without sensitive payload details."""

        self._emit("ERROR", "failure", stage, error_type=error_type)

    def run_stage(self, stage: str, action: Callable[[], _StageResult]) -> _StageResult:
        """Run one named stage and emit start/complete/failure events."""

        self.log_stage_start(stage)
        try:
            result = action()
        except Exception as exc:
            self.log_stage_failure(stage, type(exc).__name__)
            raise
        self.log_stage_complete(stage)
        return result
