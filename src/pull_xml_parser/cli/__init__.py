"""Command-line interface module for the pull XML parser.

This module provides the xml-dump tool, which prints the event stream of a
document for human reading.
"""

from .main import main

__all__ = ["main"]
