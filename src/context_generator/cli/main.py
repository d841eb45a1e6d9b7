"""Command-line interface for context-generator.

This module ties together argument parsing, the exclusion filter and the scanner,
and turns failures and signals into exit codes.

Signal Handling Notes:
    - SIGPIPE: Handled when the output pipe is closed (e.g., when piping to `head`)
    - SIGINT: Handled for a clean exit on Ctrl+C
    Output already written is never rolled back.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution (including invalid category IDs)
    2: Command-line syntax error
    126: Permission denied
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE)

Example:
    # Render the current directory
    $ context-generator

    # Preview exclusions for a project
    $ context-generator --dry-run ~/src/project

    # Show what the Python category excludes
    $ context-generator list-exclusions --category python
"""

import logging
import os
import stat
import sys
from typing import List, Optional

from context_generator.cli.argparser import LIST_COMMAND, create_list_parser, create_parser
from context_generator.cli.listing import print_category_exclusions, print_exclusions, print_patterns_only
from context_generator.cli.safe_writer import SafeWriter
from context_generator.cli.signal_handler import setup_signal_handling, signal_handler
from context_generator.config import ScanConfig
from context_generator.exceptions import ScanError
from context_generator.scanner import Scanner, file_identity

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s: %(message)s"


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr: warnings by default, everything with ``--verbose``."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def list_exclusions(argv: List[str]) -> None:
    """Run the ``list-exclusions`` subcommand.

    Raises:
        InvalidCategoryError: If ``--category`` names an unknown category.
    """
    args = create_list_parser().parse_args(argv)
    if args.category is not None:
        print_category_exclusions(sys.stdout, args.category)
    elif args.patterns_only:
        print_patterns_only(sys.stdout)
    else:
        print_exclusions(sys.stdout)


def run(config: ScanConfig) -> None:
    """Render or dry-run a scan as described by ``config``.

    The output file is opened only after the configuration has been validated, and it
    is never scanned itself, even when it lies inside the scanned directory.

    Raises:
        InvalidCategoryError: If a disabled category ID is unknown. Nothing is written.
        DirectoryNotFoundError: If the target does not exist. Nothing is written.
        ScanError: If reading fails midway. Output written so far is kept.
    """
    exclusion_filter = config.build_filter()

    output_file = config.output if config.output else sys.stdout.fileno()
    with SafeWriter(output_file) as safe_writer:
        output_stat = os.fstat(safe_writer.fd)
        skip_files = [file_identity(output_stat)] if stat.S_ISREG(output_stat.st_mode) else []
        scanner = Scanner(exclusion_filter, skip_files)
        try:
            if config.dry_run:
                scanner.dry_run(config.directory, safe_writer)
            else:
                count = scanner.scan(config.directory, safe_writer)
                logger.info("Rendered %d files", count)
        except BrokenPipeError:
            pass  # SafeWriter will automatically close in the context manager


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the context-generator command-line interface.

    Args:
        argv: Arguments without the program name. Defaults to ``sys.argv[1:]``.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE)
    """
    setup_signal_handling()
    argv = list(sys.argv[1:] if argv is None else argv)

    try:
        if argv and argv[0] == LIST_COMMAND:
            list_exclusions(argv[1:])
        else:
            args = create_parser().parse_args(argv)
            config = ScanConfig.from_namespace(args)
            configure_logging(config.verbose)
            run(config)
    except ScanError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126 if isinstance(e.__cause__, PermissionError) else 1)
    except BrokenPipeError:
        pass
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    # Handle exit codes based on received signals
    if signal_handler.interrupted:
        sys.exit(signal_handler.exit_code)


if __name__ == "__main__":
    main()
