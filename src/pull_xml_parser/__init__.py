"""Pull XML Parser.

A small streaming parser that turns XML-like markup into a flat sequence of
Open, Text and Close events without building a tree.

Progressive API Disclosure:
- Level 1: Simple functions - parse_events(), parse_file(), iter_events()
- Level 2: Never-raising result - collect_events()
- Level 3: Pull interface - XMLPullParser with next_event()
- Level 4: Custom media - InputSource subclasses
"""

__version__ = "0.1.0"
__author__ = "Pull XML Parser Team"

# Level 1 and 2: Simple functions
# Level 3: Pull interface
from .api import (
    EventStreamResult,
    ParserState,
    XMLPullParser,
    collect_events,
    iter_events,
    parse_events,
    parse_file,
)

# Level 4: Input sources
from .character import FileInputSource, InputSource, MemoryInputSource

# Configuration classes for advanced usage
from .shared.config import ParserConfig

# Events and diagnostics for all API levels
from .shared.events import Attribute, CloseEvent, Event, EventKind, OpenEvent, TextEvent
from .shared.result import InputSourceError, ParseDiagnostic, ParseErrorKind, XMLParseError

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1 and 2: Simple functions
    "iter_events",
    "parse_events",
    "parse_file",
    "collect_events",
    "EventStreamResult",

    # Level 3: Pull interface
    "XMLPullParser",
    "ParserState",

    # Level 4: Input sources
    "InputSource",
    "FileInputSource",
    "MemoryInputSource",

    # Configuration
    "ParserConfig",

    # Events and diagnostics
    "Attribute",
    "CloseEvent",
    "Event",
    "EventKind",
    "OpenEvent",
    "TextEvent",
    "InputSourceError",
    "ParseDiagnostic",
    "ParseErrorKind",
    "XMLParseError",
]
