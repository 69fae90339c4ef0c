"""Configuration classes for pull-based XML parsing.

This module provides immutable configuration objects for the parser and the
dump tool. Both validate themselves on construction.
"""

import json
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_READ_MODES = ["file", "memory", "interface"]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for a pull parser instance.

    Thread-safe due to frozen dataclass implementation; a parser keeps the
    configuration it was created with across sessions.
    """

    correlation_id: Optional[str] = None
    # Debug-log every scanned token and decoded tag.
    trace_tokens: bool = False
    # Level for configure_logging(); the parser itself never changes logger levels.
    logging_level: str = "WARNING"
    # Accept processing instructions closed with "?/>" as seen in some real files.
    tolerate_stray_slash_in_processing_instruction: bool = True

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {VALID_LOGGING_LEVELS}",
                field_name="logging_level",
                suggestions=VALID_LOGGING_LEVELS,
            )
        if self.correlation_id is not None and not self.correlation_id.strip():
            raise ConfigValidationError(
                "correlation_id must be None or a non-blank string",
                field_name="correlation_id",
            )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ParserConfig()
            >>> config.override(trace_tokens=True).trace_tokens
            True
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                suggestions=sorted(known),
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def strict(cls) -> "ParserConfig":
        """Create configuration that rejects the "?/>" processing instruction ending."""
        return cls(tolerate_stray_slash_in_processing_instruction=False)

    @classmethod
    def debugging(cls, correlation_id: Optional[str] = None) -> "ParserConfig":
        """Create configuration that traces every token at DEBUG level."""
        return cls(
            correlation_id=correlation_id,
            trace_tokens=True,
            logging_level="DEBUG",
        )


@dataclass(frozen=True)
class DumpConfig:
    """Configuration for the event dump tool."""

    indent_width: int = 4
    read_mode: str = "file"
    parser: ParserConfig = field(default_factory=ParserConfig)

    def __post_init__(self) -> None:
        """Validate dump configuration."""
        if self.indent_width < 0:
            raise ConfigValidationError(
                "indent_width must be >= 0", field_name="indent_width"
            )
        if self.read_mode not in VALID_READ_MODES:
            raise ConfigValidationError(
                f"read_mode must be one of {VALID_READ_MODES}",
                field_name="read_mode",
                suggestions=VALID_READ_MODES,
            )
