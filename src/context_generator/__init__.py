"""Directory to LLM context conversion utilities.

This package scans a directory tree, filters out paths matching a catalog of
well-known exclusion patterns (plus any user-supplied ones), and renders the
remaining text files in a plain delimited format suitable for pasting into
Large Language Model (LLM) chats.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("context-generator")
except PackageNotFoundError:
    __version__ = "unknown"
