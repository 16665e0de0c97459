"""Telemetry and observability helpers.

This package emits structured resolve events through loguru.
"""

from .logger import ResolveLogger, configure_logging

__all__ = ["ResolveLogger", "configure_logging"]
