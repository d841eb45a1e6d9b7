"""Command-line argument parsing for context-generator.

This module defines the command-line interface for context-generator: the main
scanning command and the ``list-exclusions`` subcommand.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from context_generator import __version__
from context_generator.config import split_ids

PROG = "context-generator"

LIST_COMMAND = "list-exclusions"


class CommaSeparatedAction(argparse.Action):
    """Action that accumulates values, splitting each one on commas.

    ``--disable-category go,vcs --disable-category logs`` yields ``["go", "vcs", "logs"]``.
    """

    def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
        super().__init__(option_strings, dest, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        current = list(getattr(namespace, self.dest, None) or [])
        if values is not None:
            current.extend(split_ids([values] if isinstance(values, str) else [str(v) for v in values]))
        setattr(namespace, self.dest, current)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the main scanning command.

    Returns:
        An ArgumentParser instance configured with context-generator's options.
    """
    description = """
    context-generator: quickly create context for GPT-like apps from your source code.

    Walks a directory, leaves out version control metadata, dependencies, build
    output, caches, secrets, editor files and other noise, and prints every remaining
    text file between separator lines, ready to be pasted into a chat.

    Default exclusions are organized in categories. Use 'context-generator
    list-exclusions' to see them, --disable-category to turn some off, or
    --no-defaults to turn them all off.
    """

    epilog = """
    Examples:
      # Scan the current directory
      context-generator

      # Scan a specific directory and save the result
      context-generator src/ -o context.txt

      # Preview what would be processed and what would be excluded
      context-generator --dry-run src/

      # Exclude additional patterns
      context-generator --exclude "*.backup" --exclude "temp/*"

      # Include Go test files and log files again
      context-generator --disable-category go,logs

      # Also honor a .gitignore file
      context-generator --exclude-from .gitignore

      # List exclusion categories and their patterns
      context-generator list-exclusions
      context-generator list-exclusions --category python
      context-generator list-exclusions --patterns-only
    """

    parser = argparse.ArgumentParser(
        prog=PROG,
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"{PROG} {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "directory",
        nargs="?",
        type=Path,
        default=Path("."),
        help="The directory to scan (default: current directory). Paths in the output are relative to it.",
    )
    parser.add_argument(
        "--exclude",
        metavar="PATTERN",
        action="append",
        default=[],
        help="Exclude files and directories matching this glob pattern (can be specified multiple times).",
    )
    parser.add_argument(
        "--disable-category",
        metavar="ID",
        action=CommaSeparatedAction,
        default=[],
        help="Disable a default exclusion category by ID; accepts comma-separated IDs (can be repeated).",
    )
    parser.add_argument(
        "--no-defaults",
        action="store_true",
        help="Disable all default exclusions; only --exclude and --exclude-from patterns apply.",
    )
    parser.add_argument(
        "--exclude-from",
        metavar="FILE",
        type=Path,
        action="append",
        default=[],
        help="Also exclude paths matching the rules of a .gitignore-style file (can be specified multiple times).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show which files would be processed and which excluded, without printing any content.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log exclusions and skipped files to stderr.",
    )

    return parser


def create_list_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``list-exclusions`` subcommand."""
    parser = argparse.ArgumentParser(
        prog=f"{PROG} {LIST_COMMAND}",
        description="List all default exclusions organized by category.",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--category",
        metavar="ID",
        help="Show the patterns of a single category only.",
    )
    group.add_argument(
        "--patterns-only",
        action="store_true",
        help="Show only the patterns: wildcard patterns first, then literal ones.",
    )
    return parser
