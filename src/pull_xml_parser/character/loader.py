"""Whole-file loading helper for memory-backed parsing."""

import os

from pull_xml_parser.shared.logging import get_logger
from pull_xml_parser.shared.result import InputSourceError

from .source import PathType

logger = get_logger(__name__, component="loader")


def load_file_to_memory(path: PathType) -> bytes:
    """Read the whole of ``path`` into memory.

    Args:
        path: File to load

    Returns:
        The file's bytes

    Raises:
        InputSourceError: If the file cannot be read or is empty
    """
    display = os.fspath(path)
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as e:
        raise InputSourceError(f"Failed opening file:  {display}") from e

    if not data:
        raise InputSourceError(f"File is empty:  {display}")

    logger.debug("Loaded file into memory", extra={"source": display, "size": len(data)})
    return data
