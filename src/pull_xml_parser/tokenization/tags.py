"""Decoding of the four tag shapes.

Recognized forms, entered with ``<`` as the current character::

    <name [attr1[=value1] [attr2[=value2] ...]] [/]>
    <?name [attr1[=value1] ...] ?>
    </name>
    <!-- comment -->  and  <![marked[ section ]]>
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from pull_xml_parser.shared.config import ParserConfig
from pull_xml_parser.shared.events import Attribute, CloseEvent, Event, OpenEvent
from pull_xml_parser.shared.logging import CorrelationLogger, get_logger
from pull_xml_parser.shared.result import ParseErrorKind, XMLParseError
from pull_xml_parser.tree.stack import ElementStack

from .tokenizer import DELIMITERS_WITH_EQUALS, DELIMITERS_WITH_SLASH, Tokenizer

COMMENT_TERMINATOR = "-->"
MARKED_SECTION_TERMINATOR = "]]>"

UNEXPECTED_END_OF_INPUT = "Unexpected end of input."


class TagShape(Enum):
    """Shapes a tag can take once its first two characters are known."""

    BEGIN = auto()                   # <name ...> or <name .../>
    PROCESSING_INSTRUCTION = auto()  # <?name ...?>
    END = auto()                     # </name>
    COMMENT = auto()                 # <!-- ... -->
    MARKED_SECTION = auto()          # <![ ... ]]>


@dataclass(frozen=True)
class TagResult:
    """Outcome of decoding one tag.

    Attributes:
        shape: Which tag shape was decoded
        event: Event to hand to the caller; None for comments and marked sections
        self_closing: The open event needs a synthesized close on the next call
    """

    shape: TagShape
    event: Optional[Event] = None
    self_closing: bool = False


class TagStateMachine:
    """Decodes tags from a tokenizer and keeps the element stack in step."""

    def __init__(
        self,
        tokenizer: Tokenizer,
        stack: ElementStack,
        config: Optional[ParserConfig] = None,
        logger: Optional[CorrelationLogger] = None
    ) -> None:
        self.tokenizer = tokenizer
        self.stack = stack
        self.config = config or ParserConfig()
        self.logger = logger or get_logger(__name__, component="tags")

    def parse_tag(self) -> TagResult:
        """Decode the tag starting at the current ``<``.

        Raises:
            XMLParseError: If the tag is malformed, unterminated or mismatched
        """
        tokenizer = self.tokenizer
        tag_offset = tokenizer.offset - 1
        tokenizer.advance()  # Eat the '<'

        if tokenizer.char == "/":
            result = self._parse_end_tag(tag_offset)
        elif tokenizer.char == "!":
            result = self._parse_bang_tag(tag_offset)
        else:
            result = self._parse_begin_tag(tag_offset)

        if self.config.trace_tokens and self.logger.is_debug_enabled():
            self.logger.debug(
                "Decoded tag",
                extra={
                    "shape": result.shape.name,
                    "tag_offset": tag_offset,
                    "tag_name": getattr(result.event, "name", None),
                },
            )
        return result

    def _fail_expected(self, message: str) -> XMLParseError:
        """Error for a missing required delimiter, PREMATURE_EOF if input ran out."""
        kind = (
            ParseErrorKind.PREMATURE_EOF
            if self.tokenizer.char is None
            else ParseErrorKind.MALFORMED_TAG
        )
        return XMLParseError(kind, message, self.tokenizer.offset)

    def _premature_eof(self) -> XMLParseError:
        return XMLParseError(
            ParseErrorKind.PREMATURE_EOF, UNEXPECTED_END_OF_INPUT, self.tokenizer.offset
        )

    def _parse_end_tag(self, tag_offset: int) -> TagResult:
        tokenizer = self.tokenizer
        tokenizer.advance()  # Eat the '/'

        name = tokenizer.next_token(DELIMITERS_WITH_EQUALS)
        if name is None:
            raise self._premature_eof()

        if tokenizer.char != ">":
            raise self._fail_expected(f"Expected '>' at end of tag:  {name}")
        tokenizer.advance()  # Eat the '>'

        close = self.stack.pop_matching(name, tag_offset)
        return TagResult(TagShape.END, close)

    def _parse_bang_tag(self, tag_offset: int) -> TagResult:
        tokenizer = self.tokenizer
        tokenizer.advance()  # Eat the '!'
        opener = tokenizer.char
        tokenizer.advance()  # Eat the '-' or '['

        if opener == "[":
            shape, terminator = TagShape.MARKED_SECTION, MARKED_SECTION_TERMINATOR
        elif opener == "-" and tokenizer.char == "-":
            tokenizer.advance()  # Eat the second '-'
            shape, terminator = TagShape.COMMENT, COMMENT_TERMINATOR
        elif opener is None:
            raise self._premature_eof()
        else:
            raise XMLParseError(
                ParseErrorKind.MALFORMED_TAG,
                "Malformed tag beginning with '!'",
                tag_offset,
            )

        if not tokenizer.skip_past(terminator):
            raise self._premature_eof()
        return TagResult(shape)

    def _parse_begin_tag(self, tag_offset: int) -> TagResult:
        tokenizer = self.tokenizer

        question_marked = tokenizer.char == "?"
        if question_marked:
            tokenizer.advance()

        name = tokenizer.next_token(DELIMITERS_WITH_SLASH)
        if name is None:
            raise self._premature_eof()

        attributes = self._parse_attributes(name)

        self_closing = False
        if question_marked:
            if tokenizer.char != "?":
                raise self._fail_expected("Expected '?' at end of tag.")
            # A processing instruction never has a value or a separate end tag.
            self_closing = True
            tokenizer.advance()

        if tokenizer.char == "/":
            if question_marked and not self.config.tolerate_stray_slash_in_processing_instruction:
                raise XMLParseError(
                    ParseErrorKind.MALFORMED_TAG,
                    f"Unexpected '/' after '?' in tag:  {name}",
                    tokenizer.offset,
                )
            self_closing = True
            tokenizer.advance()

        if tokenizer.char != ">":
            raise self._fail_expected("Expected '>' at end of tag.")
        tokenizer.advance()  # Eat the trailing '>'

        begin = OpenEvent(name, tag_offset, tuple(attributes))
        element = self.stack.push(begin)
        if self_closing:
            element.close = CloseEvent(name)

        shape = TagShape.PROCESSING_INSTRUCTION if question_marked else TagShape.BEGIN
        return TagResult(shape, begin, self_closing)

    def _parse_attributes(self, tag_name: str) -> List[Attribute]:
        tokenizer = self.tokenizer
        attributes: List[Attribute] = []

        while tokenizer.char not in ("/", ">", "?"):
            if tokenizer.char is None:
                raise self._premature_eof()
            start = tokenizer.offset

            name = tokenizer.next_token(DELIMITERS_WITH_EQUALS)
            if name is None:
                raise self._premature_eof()

            value = ""
            if tokenizer.char == "=":
                tokenizer.advance()
                token = tokenizer.next_token(DELIMITERS_WITH_EQUALS)
                if token is None:
                    raise self._premature_eof()
                value = token

            if tokenizer.offset == start:
                # Nothing was consumed, e.g. a stray '<' inside the tag.
                raise XMLParseError(
                    ParseErrorKind.MALFORMED_TAG,
                    f"Unexpected character '{tokenizer.char}' in tag '{tag_name}'",
                    tokenizer.offset,
                )
            attributes.append(Attribute(name, value))

        return attributes
