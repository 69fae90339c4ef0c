"""Error kinds, diagnostics and exceptions for pull-based XML parsing.

Every fatal condition a parse session can hit is described by a
``ParseErrorKind``. Internally the parsing layers raise ``XMLParseError``; the
pull parser catches it once and keeps the resulting ``ParseDiagnostic`` as the
session's terminal state.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict


class ParseErrorKind(Enum):
    """Categories of fatal parse conditions."""

    IO_FAILURE = auto()           # Input source could not be opened, sought or read
    PREMATURE_EOF = auto()        # Input ended while something was still expected
    STRUCTURAL_MISMATCH = auto()  # End tag does not match the innermost open element
    MALFORMED_TAG = auto()        # Tag shape could not be decoded
    UNEXPECTED_CONTENT = auto()   # Non-whitespace text outside all elements


@dataclass(frozen=True)
class ParseDiagnostic:
    """Terminal diagnostic of a parse session."""

    kind: ParseErrorKind
    message: str
    offset: int = 0

    def __post_init__(self) -> None:
        """Validate diagnostic."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    def to_dict(self) -> Dict[str, Any]:
        """Convert diagnostic to a JSON-friendly dictionary."""
        return {
            "kind": self.kind.name,
            "message": self.message,
            "offset": self.offset,
        }

    def __str__(self) -> str:
        return f"{self.message} (near offset {self.offset})"


class XMLParseError(Exception):
    """Raised by the parsing layers when a session has to stop."""

    def __init__(self, kind: ParseErrorKind, message: str, offset: int = 0) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.offset = offset

    @property
    def diagnostic(self) -> ParseDiagnostic:
        """The error as an immutable diagnostic."""
        return ParseDiagnostic(self.kind, self.message, self.offset)

    @classmethod
    def from_diagnostic(cls, diagnostic: ParseDiagnostic) -> "XMLParseError":
        """Rebuild the exception matching a recorded diagnostic."""
        if diagnostic.kind is ParseErrorKind.IO_FAILURE:
            return InputSourceError(diagnostic.message, diagnostic.offset)
        return cls(diagnostic.kind, diagnostic.message, diagnostic.offset)


class InputSourceError(XMLParseError):
    """Input source could not be opened, sought or read."""

    def __init__(self, message: str, offset: int = 0) -> None:
        super().__init__(ParseErrorKind.IO_FAILURE, message, offset)
