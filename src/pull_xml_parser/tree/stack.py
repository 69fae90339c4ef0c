"""Nesting stack of currently open elements.

The stack's top is always the innermost element whose close event has not been
produced yet. Only the tag state machine and the pull parser mutate it.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from pull_xml_parser.shared.events import CloseEvent, OpenEvent, TextEvent
from pull_xml_parser.shared.result import ParseErrorKind, XMLParseError


@dataclass
class OpenElement:
    """Stack entry: the element's open event plus slots for its text and close."""

    begin: OpenEvent
    text: Optional[TextEvent] = None
    close: Optional[CloseEvent] = None

    @property
    def name(self) -> str:
        return self.begin.name

    @property
    def offset(self) -> int:
        return self.begin.offset


class ElementStack:
    """LIFO record of open elements."""

    def __init__(self) -> None:
        self._elements: List[OpenElement] = []

    def __len__(self) -> int:
        return len(self._elements)

    def __bool__(self) -> bool:
        return bool(self._elements)

    def __iter__(self) -> Iterator[OpenElement]:
        """Iterate from the outermost element to the innermost."""
        return iter(self._elements)

    @property
    def top(self) -> Optional[OpenElement]:
        return self._elements[-1] if self._elements else None

    def names(self) -> List[str]:
        """Names of the open elements, outermost first."""
        return [element.name for element in self._elements]

    def push(self, begin: OpenEvent) -> OpenElement:
        """Record a fully parsed start tag as the new innermost element."""
        top = self.top
        if top is not None and begin.offset < top.offset:
            raise ValueError(
                f"Element offsets must not decrease: {begin.offset} < {top.offset}"
            )
        element = OpenElement(begin)
        self._elements.append(element)
        return element

    def pop_matching(self, name: str, offset: int) -> CloseEvent:
        """Close the innermost element with an explicit end tag.

        Names compare ordinally and case-sensitively.

        Raises:
            XMLParseError: STRUCTURAL_MISMATCH if the stack is empty or the
                innermost element has a different name
        """
        top = self.top
        if top is None:
            raise XMLParseError(
                ParseErrorKind.STRUCTURAL_MISMATCH,
                f"Unexpected end tag outside of all tags:  {name}",
                offset,
            )
        if name != top.name:
            raise XMLParseError(
                ParseErrorKind.STRUCTURAL_MISMATCH,
                f"Mismatched end tag, found '{name}', expected '{top.name}'",
                offset,
            )
        top.close = CloseEvent(top.name)
        self._elements.pop()
        return top.close

    def pop_synthesized(self) -> CloseEvent:
        """Close the innermost element of a self-closing tag without reading input."""
        top = self.top
        if top is None:
            raise IndexError("pop from empty element stack")
        if top.close is None:
            top.close = CloseEvent(top.name)
        self._elements.pop()
        return top.close

    def attach_text(self, value: str, offset: int) -> Optional[TextEvent]:
        """Attach text found between tags to the innermost element.

        Returns:
            The text event, or None for whitespace found outside all elements

        Raises:
            XMLParseError: UNEXPECTED_CONTENT for any other text outside all elements
        """
        top = self.top
        if top is None:
            if not value or value.isspace():
                return None
            raise XMLParseError(
                ParseErrorKind.UNEXPECTED_CONTENT,
                f"Unexpected data outside of all tags:  '{value}'",
                offset,
            )
        top.text = TextEvent(top.name, value)
        return top.text

    def clear(self) -> None:
        self._elements.clear()
