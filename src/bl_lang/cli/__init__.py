"""
BL Command-Line Interface
=========================

This package provides the command-line tools for the BL toolkit:

- **blparse**: parse a BL program or statement block and pretty-print it

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["blparse"]
