"""Element nesting for the pull XML parser.

Provides the stack that matches end tags to start tags and attaches text to the
innermost open element.
"""

from .stack import ElementStack, OpenElement

__all__ = [
    "ElementStack",
    "OpenElement",
]
