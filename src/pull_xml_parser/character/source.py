"""Character sources feeding the pull parser.

An input source supplies one character at a time and knows its own length and
exhaustion state. Byte-oriented sources map each byte to exactly one character
(8-bit, Latin-1 identity); no decoding is attempted.
"""

import os
from abc import ABC, abstractmethod
from typing import BinaryIO, Optional, Union

from pull_xml_parser.shared.logging import get_logger
from pull_xml_parser.shared.result import InputSourceError

PathType = Union[str, "os.PathLike[str]"]
MemoryData = Union[bytes, bytearray, memoryview, str]


class InputSource(ABC):
    """Capability set every character source has to provide.

    Subclass this to plug a custom medium into the parser. The parser works on
    a shallow copy taken at session start, so cursor state kept in plain
    attributes is never advanced on the caller's own instance.
    """

    @abstractmethod
    def length(self) -> int:
        """Total number of characters in the medium."""

    @abstractmethod
    def seek(self, offset: int) -> bool:
        """Move the cursor to ``offset``; False if it is beyond ``length()``."""

    @abstractmethod
    def read_char(self) -> Optional[str]:
        """Return the next character, or None when exhausted or errored."""

    @abstractmethod
    def at_end(self) -> bool:
        """True once the medium is exhausted."""

    @property
    def error(self) -> Optional[str]:
        """Description of a read failure, if ``read_char`` returned None because of one."""
        return None

    def close(self) -> None:
        """Release resources held by the source."""


class FileInputSource(InputSource):
    """Reads a binary file handle one byte at a time."""

    def __init__(self, handle: BinaryIO, owns_handle: bool = False,
                 name: Optional[str] = None) -> None:
        """Wrap an already open binary handle.

        Args:
            handle: Binary file object supporting read/seek/tell
            owns_handle: Close the handle when the source is closed
            name: Display name used in log records and error texts
        """
        self._handle: Optional[BinaryIO] = handle
        self._owns_handle = owns_handle
        self._exhausted = False
        self._error: Optional[str] = None
        self.name = name or getattr(handle, "name", "<stream>")
        self._logger = get_logger(__name__, component="file_source")

    @classmethod
    def open(cls, path: PathType) -> "FileInputSource":
        """Open ``path`` for reading and return a source owning the handle.

        Raises:
            InputSourceError: If the file cannot be opened
        """
        try:
            handle = open(path, "rb")
        except OSError as e:
            raise InputSourceError(f"Failed opening input file:  {os.fspath(path)}") from e
        return cls(handle, owns_handle=True, name=os.fspath(path))

    @property
    def closed(self) -> bool:
        return self._handle is None or self._handle.closed

    @property
    def error(self) -> Optional[str]:
        return self._error

    def length(self) -> int:
        handle = self._handle
        if handle is None or handle.closed:
            return 0
        position = handle.tell()
        length = handle.seek(0, os.SEEK_END)
        handle.seek(position, os.SEEK_SET)
        return length

    def seek(self, offset: int) -> bool:
        handle = self._handle
        if handle is None or handle.closed or offset < 0 or offset > self.length():
            return False
        handle.seek(offset, os.SEEK_SET)
        self._exhausted = False
        return True

    def read_char(self) -> Optional[str]:
        handle = self._handle
        if handle is None or handle.closed:
            return None
        try:
            data = handle.read(1)
        except (OSError, ValueError) as e:
            self._error = str(e) or type(e).__name__
            self._exhausted = True
            self._logger.warning("Read failed", extra={"source": self.name, "reason": self._error})
            return None
        if not data:
            self._exhausted = True
            return None
        return chr(data[0])

    def at_end(self) -> bool:
        return self.closed or self._exhausted

    def close(self) -> None:
        if self._handle is not None and self._owns_handle:
            self._handle.close()
            self._logger.debug("Closed input file", extra={"source": self.name})
        self._handle = None


class MemoryInputSource(InputSource):
    """Indexes into a caller-supplied buffer.

    Byte-like buffers yield one character per byte; a ``str`` yields one
    character per code point. The buffer is not copied, so it has to stay
    unchanged for the lifetime of the session.
    """

    def __init__(self, data: MemoryData) -> None:
        if isinstance(data, str):
            self._data: Union[str, memoryview] = data
        else:
            view = memoryview(data)
            if view.format != "B" or view.ndim != 1:
                view = view.cast("B")
            self._data = view
        self._position = 0

    def length(self) -> int:
        return len(self._data)

    def seek(self, offset: int) -> bool:
        if offset < 0:
            return False
        if offset > len(self._data):
            self._position = len(self._data)
            return False
        self._position = offset
        return True

    def read_char(self) -> Optional[str]:
        if self._position >= len(self._data):
            return None
        char = self._data[self._position]
        self._position += 1
        return char if isinstance(char, str) else chr(char)

    def at_end(self) -> bool:
        return self._position >= len(self._data)
