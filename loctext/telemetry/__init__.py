"""Telemetry and observability helpers.

This package emits deterministic stage logs for CLI commands.
"""

from .logger import CommandLogger

__all__ = ["CommandLogger"]
