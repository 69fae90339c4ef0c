"""Public parsing API for the pull XML parser."""

from .parser import (
    EventStreamResult,
    InputType,
    ParserState,
    XMLPullParser,
    collect_events,
    iter_events,
    parse_events,
    parse_file,
)

__all__ = [
    "EventStreamResult",
    "InputType",
    "ParserState",
    "XMLPullParser",
    "collect_events",
    "iter_events",
    "parse_events",
    "parse_file",
]
