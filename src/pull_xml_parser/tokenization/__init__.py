"""Tokenization layer for the pull XML parser.

Key Components:
    Tokenizer: Pulls characters and delimiter- or quote-bounded tokens
    ParserCursor: Current character and offset of a parse session
    TagStateMachine: Decodes begin, end, processing-instruction and bang tags
"""

from .tags import TagResult, TagShape, TagStateMachine
from .tokenizer import (
    DELIMITERS_WITH_EQUALS,
    DELIMITERS_WITH_SLASH,
    ParserCursor,
    Tokenizer,
)

__all__ = [
    "DELIMITERS_WITH_EQUALS",
    "DELIMITERS_WITH_SLASH",
    "ParserCursor",
    "TagResult",
    "TagShape",
    "TagStateMachine",
    "Tokenizer",
]
