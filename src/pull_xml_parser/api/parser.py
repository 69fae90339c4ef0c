"""Pull parser API producing one structural event per call.

``XMLPullParser`` is the low-level pull interface: start a session, call
``next_event()`` until it returns None, then check ``error_text``. The
module-level functions wrap it for callers who want an iterator, a list, or a
result object instead.
"""

import copy
import os
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Iterator, List, Optional, Union

from pull_xml_parser.character.source import (
    FileInputSource,
    InputSource,
    MemoryData,
    MemoryInputSource,
    PathType,
)
from pull_xml_parser.shared.config import ParserConfig
from pull_xml_parser.shared.events import Event
from pull_xml_parser.shared.logging import get_logger
from pull_xml_parser.shared.result import (
    InputSourceError,
    ParseDiagnostic,
    ParseErrorKind,
    XMLParseError,
)
from pull_xml_parser.tokenization.tags import TagStateMachine
from pull_xml_parser.tokenization.tokenizer import ParserCursor, Tokenizer
from pull_xml_parser.tree.stack import ElementStack

# Type definitions for input data
InputType = Union[str, bytes, bytearray, memoryview, Path, InputSource]

EMPTY_DOCUMENT = "Empty document.  No XML tags found."


class ParserState(Enum):
    """Session states of the pull parser."""

    AWAITING_EVENT = auto()            # Steady state, next call reads input
    EMITTING_SYNTHETIC_CLOSE = auto()  # Next call closes a self-closing tag
    CLOSED = auto()                    # No session, session finished, or fatal error


class XMLPullParser:
    """Streaming parser handing out Open, Text and Close events on demand.

    One instance serves one session at a time. Starting a new session resets
    the previous one. Malformed input never raises out of ``next_event()``;
    it ends the event stream and leaves a diagnostic behind.

    Example:
        >>> parser = XMLPullParser()
        >>> parser.begin_parsing_from_memory(b"<note><to>Mary</to></note>")
        True
        >>> [type(event).__name__ for event in parser]
        ['OpenEvent', 'OpenEvent', 'TextEvent', 'CloseEvent', 'CloseEvent']
        >>> parser.error_text
        ''
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize the parser.

        Args:
            config: Parser configuration, defaults to ``ParserConfig()``
        """
        self.config = config or ParserConfig()
        self.logger = get_logger(__name__, self.config.correlation_id, "pull_parser")

        self._stack = ElementStack()
        self._source: Optional[InputSource] = None
        self._owns_source = False
        self._tokenizer: Optional[Tokenizer] = None
        self._tags: Optional[TagStateMachine] = None
        self._error: Optional[ParseDiagnostic] = None
        self._state = ParserState.CLOSED

    # Session start

    def begin_parsing_from_file(self, path: PathType) -> bool:
        """Begin parsing the document stored in ``path``.

        Returns:
            False if the file could not be opened; see ``error_text``
        """
        self.reset()
        try:
            source = FileInputSource.open(path)
        except InputSourceError as e:
            self._fail(e)
            return False
        return self._start(source, owns_source=True, description=os.fspath(path))

    def begin_parsing_from_memory(self, data: MemoryData) -> bool:
        """Begin parsing an in-memory document.

        The buffer is not copied and must stay unchanged until the session ends.
        """
        self.reset()
        source = MemoryInputSource(data)
        return self._start(source, owns_source=True, description="<memory>")

    def begin_parsing_from_source(self, source: InputSource) -> bool:
        """Begin parsing through a caller-supplied input source.

        The session reads from a shallow copy of ``source``; the caller keeps
        ownership of any resources behind it.
        """
        self.reset()
        return self._start(
            copy.copy(source), owns_source=False, description=type(source).__name__
        )

    def _start(self, source: InputSource, owns_source: bool, description: str) -> bool:
        self._source = source
        self._owns_source = owns_source
        cursor = ParserCursor(source)
        self._tokenizer = Tokenizer(cursor, self.config.trace_tokens, self.logger)
        self._tags = TagStateMachine(self._tokenizer, self._stack, self.config, self.logger)

        try:
            length = source.length()
            primed = self._tokenizer.advance()  # Prime the current character
        except InputSourceError as e:
            self._fail(e)
            return False
        except OSError as e:
            self._fail(InputSourceError(f"Failed reading input: {e}", cursor.offset))
            return False

        if not primed:
            self._fail(XMLParseError(ParseErrorKind.PREMATURE_EOF, EMPTY_DOCUMENT, 0))
            return False

        self._state = ParserState.AWAITING_EVENT
        self.logger.debug(
            "Parse session started",
            extra={"source": description, "length": length}
        )
        return True

    # Event production

    def next_event(self) -> Optional[Event]:
        """Produce the next structural event.

        Returns:
            The next event, or None when the stream has ended. After None,
            ``error_text`` is empty for a clean end and describes the problem
            otherwise. Further calls keep returning None until a new session.
        """
        if self._state is ParserState.CLOSED:
            return None

        try:
            event = self._produce_event()
        except XMLParseError as e:
            self._fail(e)
            return None

        if event is None:
            self._state = ParserState.CLOSED
            self.logger.debug(
                "Reached end of document",
                extra={"offset": self.current_offset}
            )
        return event

    def _produce_event(self) -> Optional[Event]:
        tokenizer = self._tokenizer
        if tokenizer is None or self._tags is None:
            return None

        if self._state is ParserState.EMITTING_SYNTHETIC_CLOSE:
            self._state = ParserState.AWAITING_EVENT
            return self._stack.pop_synthesized()

        # Comments and marked sections produce no event; keep going after them.
        while True:
            pending = tokenizer.collect_whitespace()

            if tokenizer.char == "<":
                result = self._tags.parse_tag()
                if result.event is None:
                    continue
                if result.self_closing:
                    self._state = ParserState.EMITTING_SYNTHETIC_CLOSE
                return result.event

            if tokenizer.char is None:
                if self._stack:
                    names = ", ".join(f"'{name}'" for name in self._stack.names())
                    raise XMLParseError(
                        ParseErrorKind.PREMATURE_EOF,
                        f"Premature end of document, unclosed tags: {names}",
                        tokenizer.offset,
                    )
                return None

            text_offset = tokenizer.offset - 1 - len(pending)
            value = pending + tokenizer.collect_until("<")
            return self._stack.attach_text(value, max(text_offset, 0))

    def _fail(self, error: XMLParseError) -> None:
        self._error = error.diagnostic
        self._state = ParserState.CLOSED
        self.logger.warning(
            "Parse session failed",
            extra={
                "error_kind": error.kind.name,
                "error_text": error.message,
                "error_offset": error.offset,
                "open_elements": self._stack.names(),
            },
        )

    # Session end

    def reset(self) -> None:
        """Discard the session: clear the stack and flags, release the source.

        Safe to call any number of times, including before any session.
        """
        if self._source is not None:
            if self._owns_source:
                self._source.close()
            self.logger.debug("Parse session reset")
        self._source = None
        self._owns_source = False
        self._tokenizer = None
        self._tags = None
        self._stack.clear()
        self._error = None
        self._state = ParserState.CLOSED

    def close(self) -> None:
        """Alias for ``reset()``."""
        self.reset()

    # Accessors

    @property
    def state(self) -> ParserState:
        return self._state

    @property
    def error(self) -> Optional[ParseDiagnostic]:
        """Terminal diagnostic of the session, None if no fatal condition occurred."""
        return self._error

    @property
    def error_text(self) -> str:
        """Description of the fatal condition, empty when there is none."""
        return self._error.message if self._error else ""

    @property
    def error_kind(self) -> Optional[ParseErrorKind]:
        return self._error.kind if self._error else None

    @property
    def current_offset(self) -> int:
        """Number of characters consumed from the input so far."""
        return self._tokenizer.offset if self._tokenizer else 0

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._stack)

    def open_element_names(self) -> List[str]:
        """Names of currently open elements, outermost first."""
        return self._stack.names()

    def end_of_document(self) -> bool:
        """True if there is no session or its source is exhausted."""
        return self._source is None or self._source.at_end()

    def __iter__(self) -> Iterator[Event]:
        while True:
            event = self.next_event()
            if event is None:
                return
            yield event

    def __enter__(self) -> "XMLPullParser":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.reset()


@dataclass
class EventStreamResult:
    """Everything one complete session produced.

    Attributes:
        events: Events in emission order, up to the point of failure
        diagnostic: Terminal diagnostic, None for a clean end
        final_offset: Parser offset when the stream ended
    """

    events: List[Event] = field(default_factory=list)
    diagnostic: Optional[ParseDiagnostic] = None
    final_offset: int = 0

    @property
    def success(self) -> bool:
        return self.diagnostic is None

    @property
    def error_text(self) -> str:
        return self.diagnostic.message if self.diagnostic else ""


def _begin(parser: XMLPullParser, input_data: InputType) -> bool:
    """Start a session on ``input_data`` picking the matching source variant."""
    if isinstance(input_data, Path):
        return parser.begin_parsing_from_file(input_data)
    if isinstance(input_data, (str, bytes, bytearray, memoryview)):
        return parser.begin_parsing_from_memory(input_data)
    if isinstance(input_data, InputSource):
        return parser.begin_parsing_from_source(input_data)
    raise TypeError(f"Unsupported input type: {type(input_data).__name__}")


def iter_events(
    input_data: InputType,
    config: Optional[ParserConfig] = None,
    raise_on_error: bool = True
) -> Iterator[Event]:
    """Iterate over the events of a document.

    ``str`` and byte-like inputs are parsed as document text; a ``Path`` is
    opened as a file; an ``InputSource`` is read through a copy.

    Raises:
        XMLParseError: When the document turns out malformed, after all events
            preceding the problem were yielded (only if ``raise_on_error``)
    """
    parser = XMLPullParser(config)
    with parser:
        if _begin(parser, input_data):
            yield from parser
        if raise_on_error and parser.error is not None:
            raise XMLParseError.from_diagnostic(parser.error)


def parse_events(
    input_data: InputType,
    config: Optional[ParserConfig] = None
) -> List[Event]:
    """Return all events of a document as a list.

    Raises:
        XMLParseError: If the document is malformed
    """
    return list(iter_events(input_data, config))


def parse_file(path: PathType, config: Optional[ParserConfig] = None) -> List[Event]:
    """Return all events of the document stored in ``path``.

    Raises:
        XMLParseError: If the file cannot be read or the document is malformed
    """
    return parse_events(Path(path), config)


def collect_events(
    input_data: InputType,
    config: Optional[ParserConfig] = None
) -> EventStreamResult:
    """Run a whole session and return its events together with its diagnostic.

    Never raises for unreadable or malformed input.
    """
    result = EventStreamResult()
    with XMLPullParser(config) as parser:
        if _begin(parser, input_data):
            result.events.extend(parser)
        result.diagnostic = parser.error
        result.final_offset = parser.current_offset
    return result
