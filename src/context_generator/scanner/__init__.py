"""Directory scanning, content sniffing and dry-run reporting.

This package walks a directory tree under an exclusion filter and either renders the
included text files or reports what a render would include and exclude.
"""

from .scanner import SEPARATOR, Scanner, file_identity

__all__ = ["SEPARATOR", "Scanner", "file_identity"]
