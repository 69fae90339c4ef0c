"""Tests for input sources and the file loader."""

import io
from pathlib import Path

import pytest

from pull_xml_parser.character import (
    FileInputSource,
    InputSource,
    MemoryInputSource,
    load_file_to_memory,
)
from pull_xml_parser.shared.result import InputSourceError, ParseErrorKind


def read_all(source: InputSource) -> str:
    chars = []
    while True:
        char = source.read_char()
        if char is None:
            return "".join(chars)
        chars.append(char)


class TestMemoryInputSource:
    """Tests for MemoryInputSource."""

    def test_bytes(self):
        """Test reading a byte buffer one character per byte."""
        source = MemoryInputSource(b"<a/>")

        assert source.length() == 4
        assert not source.at_end()
        assert read_all(source) == "<a/>"
        assert source.at_end()
        assert source.read_char() is None

    def test_high_bytes_map_to_latin1(self):
        """Test that bytes above 0x7f become the matching Latin-1 character."""
        source = MemoryInputSource(b"\xe9\xff")
        assert read_all(source) == "éÿ"

    def test_str(self):
        """Test reading a string one code point per character."""
        source = MemoryInputSource("<é>")
        assert source.length() == 3
        assert read_all(source) == "<é>"

    def test_bytearray_and_memoryview(self):
        """Test other byte-like buffers."""
        assert read_all(MemoryInputSource(bytearray(b"xy"))) == "xy"
        assert read_all(MemoryInputSource(memoryview(b"xyz")[1:])) == "yz"

    def test_seek(self):
        """Test seeking within and beyond the buffer."""
        source = MemoryInputSource(b"abc")

        assert source.seek(2)
        assert source.read_char() == "c"
        assert source.seek(3)
        assert source.at_end()
        assert not source.seek(4)
        assert not source.seek(-1)
        assert source.seek(0)
        assert source.read_char() == "a"

    def test_empty(self):
        """Test an empty buffer."""
        source = MemoryInputSource(b"")
        assert source.length() == 0
        assert source.at_end()
        assert source.read_char() is None

    def test_no_error_reported(self):
        """Test that memory sources never report read failures."""
        assert MemoryInputSource(b"").error is None


class TestFileInputSource:
    """Tests for FileInputSource."""

    def test_open_and_read(self, tmp_path: Path):
        """Test reading a file byte by byte."""
        path = tmp_path / "doc.xml"
        path.write_bytes(b"<a>\xe9</a>")

        source = FileInputSource.open(path)
        try:
            assert source.length() == 8
            assert not source.at_end()
            assert read_all(source) == "<a>é</a>"
            assert source.at_end()
        finally:
            source.close()
        assert source.closed

    def test_length_keeps_position(self, tmp_path: Path):
        """Test that asking for the length does not move the cursor."""
        path = tmp_path / "doc.xml"
        path.write_bytes(b"abc")

        source = FileInputSource.open(path)
        try:
            assert source.read_char() == "a"
            assert source.length() == 3
            assert source.read_char() == "b"
        finally:
            source.close()

    def test_seek(self, tmp_path: Path):
        """Test seeking."""
        path = tmp_path / "doc.xml"
        path.write_bytes(b"abc")

        source = FileInputSource.open(path)
        try:
            assert source.seek(1)
            assert source.read_char() == "b"
            assert not source.seek(10)
            read_all(source)
            assert source.at_end()
            assert source.seek(0)
            assert not source.at_end()
        finally:
            source.close()

    def test_open_missing_file(self, tmp_path: Path):
        """Test that a missing file raises an IO failure."""
        missing = tmp_path / "missing.xml"
        with pytest.raises(InputSourceError, match="Failed opening input file") as exc:
            FileInputSource.open(missing)
        assert exc.value.kind is ParseErrorKind.IO_FAILURE

    def test_borrowed_handle_not_closed(self):
        """Test that a source does not close handles it does not own."""
        handle = io.BytesIO(b"<a/>")
        source = FileInputSource(handle)

        assert source.name == "<stream>"
        source.close()
        assert not handle.closed
        assert source.at_end()
        assert source.read_char() is None

    def test_owned_handle_closed(self):
        """Test that an owned handle is closed with the source."""
        handle = io.BytesIO(b"<a/>")
        source = FileInputSource(handle, owns_handle=True, name="mem")

        source.close()
        assert handle.closed
        assert source.length() == 0
        assert not source.seek(0)
        assert source.read_char() is None

    def test_read_failure_recorded(self):
        """Test that read errors end the stream and are reported."""

        class BrokenStream(io.BytesIO):
            def read(self, size=-1):
                raise OSError("device unplugged")

        source = FileInputSource(BrokenStream(b"abc"))

        assert source.read_char() is None
        assert source.at_end()
        assert source.error == "device unplugged"


class TestLoadFileToMemory:
    """Tests for load_file_to_memory."""

    def test_load(self, tmp_path: Path):
        """Test loading a file."""
        path = tmp_path / "doc.xml"
        path.write_bytes(b"<a/>")
        assert load_file_to_memory(path) == b"<a/>"
        assert load_file_to_memory(str(path)) == b"<a/>"

    def test_missing(self, tmp_path: Path):
        """Test loading a missing file."""
        with pytest.raises(InputSourceError, match="Failed opening file"):
            load_file_to_memory(tmp_path / "nope.xml")

    def test_empty(self, tmp_path: Path):
        """Test loading an empty file."""
        path = tmp_path / "empty.xml"
        path.write_bytes(b"")
        with pytest.raises(InputSourceError, match="File is empty"):
            load_file_to_memory(path)
