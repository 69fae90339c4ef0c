"""Main CLI entry point for the xml-dump command-line tool.

Dumps the event stream of a document in a human-readable, indented form. The
document can be read straight from the file, loaded into memory first, or read
through a caller-style input source.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from pull_xml_parser import __version__
from pull_xml_parser.api.parser import XMLPullParser
from pull_xml_parser.character.loader import load_file_to_memory
from pull_xml_parser.character.source import FileInputSource
from pull_xml_parser.shared.config import (
    VALID_READ_MODES,
    ConfigValidationError,
    DumpConfig,
    ParserConfig,
)
from pull_xml_parser.shared.events import CloseEvent, Event, OpenEvent, TextEvent
from pull_xml_parser.shared.logging import configure_logging, get_logger
from pull_xml_parser.shared.result import InputSourceError

logger = get_logger(__name__, component="cli")


def format_event(event: Event, level: int, indent_width: int = 4) -> List[str]:
    """Render one event as output lines.

    Args:
        event: Event to render
        level: Nesting level the event is printed at
        indent_width: Spaces per nesting level

    Returns:
        Lines without trailing newlines
    """
    pad = " " * (indent_width * level)
    if isinstance(event, OpenEvent):
        lines = [f"{pad}BEGIN '{event.name}', offset={event.offset}"]
        attribute_pad = " " * (indent_width * (level + 1))
        for index, attribute in enumerate(event.attributes):
            lines.append(
                f"{attribute_pad}ATTRIBUTE {index}:  '{attribute.name}'='{attribute.value}'"
            )
        return lines
    if isinstance(event, TextEvent):
        return [f"{pad}NAME '{event.name}', VALUE '{event.value}'"]
    if isinstance(event, CloseEvent):
        return [f"{pad}END '{event.name}'"]
    raise TypeError(f"Unknown event type: {type(event).__name__}")


def dump_events(parser: XMLPullParser, out: TextIO, indent_width: int = 4) -> bool:
    """Write every event of the running session to ``out``.

    Returns:
        True if the stream ended cleanly
    """
    level = 1
    for event in parser:
        if isinstance(event, CloseEvent):
            level -= 1
        for line in format_event(event, level, indent_width):
            print(line, file=out)
        if isinstance(event, OpenEvent):
            level += 1

    if parser.error_text:
        print(f"Error:  {parser.error_text}", file=out)
        print(f"Near offset:  {parser.current_offset}", file=out)
        return False
    return True


def run_dump(path: Path, config: DumpConfig, out: TextIO) -> int:
    """Dump ``path`` and return the process exit code."""
    parser = XMLPullParser(config.parser)
    source: Optional[FileInputSource] = None
    try:
        if config.read_mode == "memory":
            started = parser.begin_parsing_from_memory(load_file_to_memory(path))
        elif config.read_mode == "interface":
            source = FileInputSource.open(path)
            started = parser.begin_parsing_from_source(source)
        else:
            started = parser.begin_parsing_from_file(path)
    except InputSourceError as e:
        print(e.message, file=out)
        return 1

    try:
        if not started:
            if parser.error_text:
                print(parser.error_text, file=out)
            print(f"Failed to begin parsing file:  {path}", file=out)
            return 1

        print(f"BEGIN DUMP OF FILE '{path}'", file=out)
        if not dump_events(parser, out, config.indent_width):
            print("Terminating with error.", file=out)
            return 1
        print(f"END DUMP OF FILE '{path}'", file=out)
        logger.info(
            "Dump finished",
            extra={"file": str(path), "mode": config.read_mode, "offset": parser.current_offset}
        )
        return 0
    finally:
        parser.reset()
        if source is not None:
            source.close()


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-dump",
        description="Dump the Open/Text/Close event stream of an XML document"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "file",
        type=Path,
        help="XML document to dump"
    )
    parser.add_argument(
        "mode",
        nargs="?",
        choices=VALID_READ_MODES,
        default="file",
        help="How the document is read (default: file)"
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=4,
        help="Spaces per nesting level (default: 4)"
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Log every scanned token (implies --verbose)"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        parser_config = ParserConfig(trace_tokens=args.trace)
        if args.trace or args.verbose:
            parser_config = parser_config.override(logging_level="DEBUG")
        elif args.quiet:
            parser_config = parser_config.override(logging_level="ERROR")
        config = DumpConfig(
            indent_width=args.indent,
            read_mode=args.mode,
            parser=parser_config,
        )
    except ConfigValidationError as e:
        print(f"Invalid option: {e}", file=sys.stderr)
        return 2

    configure_logging(config.parser.logging_level)

    try:
        return run_dump(args.file, config, sys.stdout)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT
    except Exception:
        logger.exception("Dump failed", extra={"file": str(args.file)})
        print(
            "Exception!  Sorry, something bad happened and xml-dump has to shut down.",
            file=sys.stderr,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
