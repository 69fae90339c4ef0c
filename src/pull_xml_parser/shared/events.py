"""Structural events produced by the pull parser.

Each call to the parser yields exactly one of ``OpenEvent``, ``TextEvent`` or
``CloseEvent``. Events are frozen snapshots; nothing the parser does afterwards
changes them.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, Optional, Tuple, Union


class EventKind(Enum):
    """Kinds of structural events."""

    OPEN = auto()    # Start tag: <name attr=value>
    TEXT = auto()    # Characters between a start tag and its end tag
    CLOSE = auto()   # End tag, explicit or synthesized from a self-closing tag


@dataclass(frozen=True)
class Attribute:
    """Name/value pair from a start tag; value is empty if there was no ``=value``."""

    name: str
    value: str = ""


@dataclass(frozen=True)
class OpenEvent:
    """A start tag.

    Attributes:
        name: Tag name
        offset: Offset of the ``<`` that started the tag
        attributes: Attributes in document order, duplicates retained
    """

    kind: ClassVar[EventKind] = EventKind.OPEN

    name: str
    offset: int = 0
    attributes: Tuple[Attribute, ...] = ()

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of the first attribute called ``name``."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute.value
        return default


@dataclass(frozen=True)
class TextEvent:
    """Text found inside the element ``name``, whitespace kept verbatim."""

    kind: ClassVar[EventKind] = EventKind.TEXT

    name: str
    value: str


@dataclass(frozen=True)
class CloseEvent:
    """An end tag for ``name``."""

    kind: ClassVar[EventKind] = EventKind.CLOSE

    name: str


Event = Union[OpenEvent, TextEvent, CloseEvent]
