"""Incremental lexing over an input source.

The tokenizer keeps a one-character lookahead (the *current* character) and
extracts delimiter-bounded or quote-bounded tokens from it. It never looks
further ahead than that single character.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional

from pull_xml_parser.character.source import InputSource
from pull_xml_parser.shared.logging import CorrelationLogger, get_logger
from pull_xml_parser.shared.result import InputSourceError

WHITESPACE_DELIMITERS = " \r\n\t"

# Attribute names and values stop at "=", so "name=value" splits in two.
DELIMITERS_WITH_EQUALS: FrozenSet[str] = frozenset("=><?" + WHITESPACE_DELIMITERS)
# Tag names stop at "/", leaving it current for the self-closing check.
DELIMITERS_WITH_SLASH: FrozenSet[str] = frozenset("/><?" + WHITESPACE_DELIMITERS)

QUOTE_CHARACTERS = ('"', "'")


@dataclass
class ParserCursor:
    """Position of a parse session within its input source.

    Attributes:
        source: Input source being consumed
        char: Current (lookahead) character, None once nothing more could be read
        offset: Number of characters consumed from the source, lookahead included
    """

    source: InputSource
    char: Optional[str] = None
    offset: int = 0

    @property
    def exhausted(self) -> bool:
        """True when no character is current and the source reports its end."""
        return self.char is None and self.source.at_end()


class Tokenizer:
    """Pulls characters and tokens from a ``ParserCursor``."""

    def __init__(
        self,
        cursor: ParserCursor,
        trace: bool = False,
        logger: Optional[CorrelationLogger] = None
    ) -> None:
        """Initialize the tokenizer.

        Args:
            cursor: Cursor over the session's input source
            trace: Debug-log every token produced
            logger: Logger to trace through
        """
        self.cursor = cursor
        self.trace = trace
        self.logger = logger or get_logger(__name__, component="tokenizer")

    @property
    def char(self) -> Optional[str]:
        return self.cursor.char

    @property
    def offset(self) -> int:
        return self.cursor.offset

    def advance(self) -> bool:
        """Make the next character current.

        Returns:
            False if the source had nothing more to give

        Raises:
            InputSourceError: If the source reported a read failure
        """
        cursor = self.cursor
        char = cursor.source.read_char()
        if char is None:
            cursor.char = None
            reason = getattr(cursor.source, "error", None)
            if reason:
                raise InputSourceError(f"Failed reading input: {reason}", cursor.offset)
            return False
        cursor.char = char
        cursor.offset += 1
        return True

    def skip_whitespace(self) -> None:
        while self.cursor.char is not None and self.cursor.char.isspace():
            self.advance()

    def collect_whitespace(self) -> str:
        """Consume a run of whitespace and return it verbatim."""
        chars = []
        while self.cursor.char is not None and self.cursor.char.isspace():
            chars.append(self.cursor.char)
            self.advance()
        return "".join(chars)

    def collect_until(self, stop: str) -> str:
        """Consume characters up to, not including, ``stop`` or the end of input."""
        chars = []
        while self.cursor.char is not None and self.cursor.char != stop:
            chars.append(self.cursor.char)
            self.advance()
        return "".join(chars)

    def skip_past(self, terminator: str) -> bool:
        """Discard input up to and including the literal ``terminator``.

        Returns:
            False if the input ended before the terminator was seen
        """
        window = ""
        while self.cursor.char is not None:
            window = (window + self.cursor.char)[-len(terminator):]
            self.advance()
            if window == terminator:
                return True
        return False

    def next_token(self, delimiters: FrozenSet[str]) -> Optional[str]:
        """Read the next token from the current position.

        Leading and trailing whitespace is skipped. A token starting with a
        quote runs to the matching quote, which is consumed and dropped; an
        unterminated quote runs to the end of input. Any other token stops in
        front of the first character in ``delimiters``, which stays current.

        Returns:
            The token, possibly empty, or None if it is empty because the input
            is exhausted
        """
        self.skip_whitespace()

        quote = self.cursor.char
        if quote in QUOTE_CHARACTERS:
            self.advance()
            token = self.collect_until(quote)
            if self.cursor.char == quote:
                self.advance()
        else:
            chars = []
            while self.cursor.char is not None and self.cursor.char not in delimiters:
                chars.append(self.cursor.char)
                self.advance()
            token = "".join(chars)

        self.skip_whitespace()

        if self.trace and self.logger.is_debug_enabled():
            self.logger.debug(
                "Scanned token",
                extra={"token": token, "offset": self.cursor.offset}
            )

        if not token and self.cursor.exhausted:
            return None
        return token
