"""Shared utilities for pull-based XML parsing.

This module provides the event types, diagnostics, configuration objects and
logging helpers used across all processing layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    DumpConfig,
    ParserConfig,
)
from .events import (
    Attribute,
    CloseEvent,
    Event,
    EventKind,
    OpenEvent,
    TextEvent,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    InputSourceError,
    ParseDiagnostic,
    ParseErrorKind,
    XMLParseError,
)

__all__ = [
    "Attribute",
    "CloseEvent",
    "Event",
    "EventKind",
    "OpenEvent",
    "TextEvent",
    "ConfigError",
    "ConfigValidationError",
    "DumpConfig",
    "ParserConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "InputSourceError",
    "ParseDiagnostic",
    "ParseErrorKind",
    "XMLParseError",
]
