"""Character input layer for the pull XML parser.

This module provides the input source abstraction with its file-backed and
memory-backed variants, plus a helper for loading whole files into memory.
"""

from .loader import load_file_to_memory
from .source import (
    FileInputSource,
    InputSource,
    MemoryData,
    MemoryInputSource,
    PathType,
)

__all__ = [
    "FileInputSource",
    "InputSource",
    "MemoryData",
    "MemoryInputSource",
    "PathType",
    "load_file_to_memory",
]
