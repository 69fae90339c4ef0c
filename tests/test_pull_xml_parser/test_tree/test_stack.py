"""Tests for the element nesting stack."""

import pytest

from pull_xml_parser.shared.events import CloseEvent, OpenEvent, TextEvent
from pull_xml_parser.shared.result import ParseErrorKind, XMLParseError
from pull_xml_parser.tree import ElementStack, OpenElement


@pytest.fixture
def stack() -> ElementStack:
    stack = ElementStack()
    stack.push(OpenEvent("note", 0))
    stack.push(OpenEvent("to", 6))
    return stack


class TestElementStack:
    """Tests for ElementStack."""

    def test_empty(self):
        """Test a fresh stack."""
        stack = ElementStack()
        assert len(stack) == 0
        assert not stack
        assert stack.top is None
        assert stack.names() == []

    def test_push(self, stack):
        """Test pushing elements."""
        assert len(stack) == 2
        assert stack.names() == ["note", "to"]
        assert isinstance(stack.top, OpenElement)
        assert stack.top.name == "to"
        assert stack.top.offset == 6
        assert [element.name for element in stack] == ["note", "to"]

    def test_push_rejects_decreasing_offsets(self, stack):
        """Test the document-order invariant on offsets."""
        with pytest.raises(ValueError, match="must not decrease"):
            stack.push(OpenEvent("late", 2))

    def test_pop_matching(self, stack):
        """Test closing the innermost element."""
        close = stack.pop_matching("to", 14)

        assert close == CloseEvent("to")
        assert stack.names() == ["note"]

    def test_pop_matching_mismatch(self, stack):
        """Test that a mismatched end tag is fatal and names both tags."""
        with pytest.raises(XMLParseError) as exc:
            stack.pop_matching("note", 14)

        assert exc.value.kind is ParseErrorKind.STRUCTURAL_MISMATCH
        assert exc.value.message == "Mismatched end tag, found 'note', expected 'to'"
        assert exc.value.offset == 14
        assert stack.names() == ["note", "to"]

    def test_pop_matching_is_case_sensitive(self, stack):
        """Test ordinal name comparison."""
        with pytest.raises(XMLParseError):
            stack.pop_matching("TO", 14)

    def test_pop_matching_empty(self):
        """Test an end tag with nothing open."""
        with pytest.raises(XMLParseError) as exc:
            ElementStack().pop_matching("a", 0)

        assert exc.value.kind is ParseErrorKind.STRUCTURAL_MISMATCH
        assert "Unexpected end tag outside of all tags" in exc.value.message

    def test_pop_synthesized(self, stack):
        """Test closing a self-closing element from its stored name."""
        stack.top.close = CloseEvent("to")
        assert stack.pop_synthesized() == CloseEvent("to")
        assert stack.pop_synthesized() == CloseEvent("note")
        assert not stack

    def test_pop_synthesized_empty(self):
        """Test that synthesizing on an empty stack is a programming error."""
        with pytest.raises(IndexError):
            ElementStack().pop_synthesized()

    def test_attach_text(self, stack):
        """Test attaching text to the innermost element."""
        text = stack.attach_text(" Mary ", 10)

        assert text == TextEvent("to", " Mary ")
        assert stack.top.text is text

    def test_attach_whitespace_outside_elements(self):
        """Test that whitespace outside all elements is discarded."""
        stack = ElementStack()
        assert stack.attach_text(" \n\t", 0) is None
        assert stack.attach_text("", 0) is None

    def test_attach_content_outside_elements(self):
        """Test that other text outside all elements is fatal."""
        with pytest.raises(XMLParseError) as exc:
            ElementStack().attach_text("junk", 7)

        assert exc.value.kind is ParseErrorKind.UNEXPECTED_CONTENT
        assert exc.value.message == "Unexpected data outside of all tags:  'junk'"
        assert exc.value.offset == 7

    def test_clear(self, stack):
        """Test clearing the stack."""
        stack.clear()
        assert not stack
