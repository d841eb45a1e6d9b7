"""Directory walking with exclusion filtering, content rendering and dry-run reports.

This module provides the Scanner class, which walks a directory tree depth-first,
prunes whatever the exclusion filter rejects, and either renders the remaining text
files into a plain delimited format or reports what a render would include and skip.
"""

import logging
import os
from typing import FrozenSet, Iterable, Iterator, List, Optional, Tuple

from context_generator.exceptions import DirectoryNotFoundError, ScanError
from context_generator.exclusion_rules.filter import ExclusionReason, Filter, relative_path
from context_generator.types import PathType, Sink

from .content_sniffer import is_text_file
from .file_record import FileRecord
from .tree_builder import build_tree, render_tree

logger = logging.getLogger(__name__)

# Opens and closes every file block and terminates the output
SEPARATOR = "-" * 20

# Prefix written before every line of file content
CONTENT_INDENT = b"    "

# A visited entry: absolute path, directory flag and exclusion reason (None if included)
WalkEntry = Tuple[str, bool, Optional[ExclusionReason]]

# Device and inode number, identifying a file independently of the path used to reach it
FileIdentity = Tuple[int, int]


def file_identity(st: os.stat_result) -> FileIdentity:
    """Return the identity of a file from its stat result."""
    return st.st_dev, st.st_ino


def _encode(text: str) -> bytes:
    # Undecodable file names round-trip back to their original bytes
    return text.encode("utf-8", "surrogateescape")


def _read_lines(path: str) -> Iterator[bytes]:
    """Yield the lines of a file without their ``\\n`` or ``\\r\\n`` terminators.

    Raises:
        ScanError: If the file cannot be opened or read.
    """
    try:
        with open(path, "rb") as file:
            for line in file:
                line = line.rstrip(b"\n")
                if line.endswith(b"\r"):
                    line = line[:-1]
                yield line
    except OSError as e:
        raise ScanError(path, e) from e


class Scanner:
    """Walks a directory and renders or reports the files an exclusion filter lets through.

    Both modes share one traversal: a depth-first walk from the absolute form of the
    target directory, visiting children in name order. An excluded directory is pruned
    (never descended into) and an excluded file is skipped. Symbolic links are not
    followed into directories.

    Output goes to a binary, append-only sink such as ``sys.stdout.buffer``, an open
    file or ``io.BytesIO``. Nothing written is ever rolled back: if the walk fails
    midway, whatever was emitted before the failure stays in the sink.

    Render format::

        --------------------
        file: src/main.py
        --------------------
            <line 1>
            <line 2>
        --------------------

    Every emitted file contributes two separator lines and the output always ends with
    exactly one more, so N files produce ``2N + 1`` separators.

    Attributes:
        exclusion_filter (Filter): Decides which entries are excluded.
        skip_files (FrozenSet[FileIdentity]): Files that are never visited, whatever the
            filter says. The CLI puts its output file here so a scan never reads its own output.

    Example:
        >>> import io
        >>> from context_generator.exclusion_rules import Filter
        >>> scanner = Scanner(Filter.with_defaults())
        >>> sink = io.BytesIO()
        >>> scanner.scan("src", sink)  # doctest: +SKIP
        12
        >>> print(sink.getvalue().decode())  # doctest: +SKIP
        --------------------
        file: main.py
        --------------------
            print("hello")
        --------------------
    """

    def __init__(self, exclusion_filter: Filter, skip_files: Iterable[FileIdentity] = ()) -> None:
        self.exclusion_filter = exclusion_filter
        self.skip_files: FrozenSet[FileIdentity] = frozenset(skip_files)

    def _is_skipped(self, path: str) -> bool:
        """Return True if ``path`` is one of ``skip_files``, such as the file being written to."""
        if not self.skip_files:
            return False
        try:
            identity = file_identity(os.stat(path))
        except OSError:
            # Dangling links cannot be the output file
            return False
        if identity in self.skip_files:
            logger.debug("Skipping %s: it is the output file", path)
            return True
        return False

    def _resolve_root(self, directory: PathType) -> str:
        """Check that the target exists and return its absolute path.

        Raises:
            DirectoryNotFoundError: If the target does not exist.
            ScanError: If the target cannot be inspected for any other reason.
        """
        try:
            os.stat(directory)
        except FileNotFoundError as e:
            raise DirectoryNotFoundError(directory) from e
        except OSError as e:
            raise ScanError(directory, e) from e
        return os.path.abspath(directory)

    def _walk(self, root: str) -> Iterator[WalkEntry]:
        """Yield every visited entry under ``root`` along with its exclusion reason.

        The root directory itself is not classified or yielded. When the target is a
        regular file, that file is the only entry.

        Raises:
            ScanError: If a directory cannot be listed or an entry cannot be inspected.
        """
        if not os.path.isdir(root):
            if self._is_skipped(root):
                return
            yield root, False, self.exclusion_filter.classify(root, root, False)
            return
        yield from self._walk_directory(root, root)

    def _walk_directory(self, directory: str, root: str) -> Iterator[WalkEntry]:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise ScanError(directory, e) from e

        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                raise ScanError(entry.path, e) from e

            if not is_dir and self._is_skipped(entry.path):
                continue

            reason = self.exclusion_filter.classify(entry.path, root, is_dir)
            if reason is not None:
                logger.debug("Excluding %s [%s: %s]", entry.path, reason.category, reason.pattern)

            yield entry.path, is_dir, reason

            if is_dir and reason is None:
                yield from self._walk_directory(entry.path, root)

    def scan(self, directory: PathType, sink: Sink) -> int:
        """Render every included text file under ``directory`` into ``sink``.

        Binary files are skipped silently. The trailing separator is written after the
        walk whether it succeeded or not.

        Args:
            directory: Directory to scan. A regular file is rendered on its own.
            sink: Binary stream receiving the output.

        Returns:
            The number of files rendered.

        Raises:
            DirectoryNotFoundError: If ``directory`` does not exist. Nothing is written.
            ScanError: If a directory or file cannot be read during the walk.
        """
        root = self._resolve_root(directory)
        rendered = 0
        try:
            for path, is_dir, reason in self._walk(root):
                if is_dir or reason is not None:
                    continue
                if self._render_file(path, root, sink):
                    rendered += 1
        finally:
            sink.write(_encode(SEPARATOR) + b"\n")
        logger.debug("Rendered %d files from %s", rendered, root)
        return rendered

    def _render_file(self, path: str, root: str, sink: Sink) -> bool:
        """Write one file block, returning False if the file was skipped.

        Only read failures are reported as ScanError; errors raised by the sink propagate
        unchanged.
        """
        if not os.path.isfile(path):
            logger.debug("Skipping %s: not a regular file", path)
            return False

        try:
            is_text = is_text_file(path)
        except OSError as e:
            raise ScanError(path, e) from e
        if not is_text:
            logger.debug("Skipping binary file %s", path)
            return False

        sink.write(_encode(SEPARATOR) + b"\n")
        sink.write(_encode(f"file: {relative_path(path, root)}") + b"\n")
        sink.write(_encode(SEPARATOR) + b"\n")
        for line in _read_lines(path):
            sink.write(CONTENT_INDENT + line + b"\n")
        return True

    def _sniff(self, path: str) -> bool:
        """Classify an included entry for the dry-run report."""
        if not os.path.isfile(path):
            return False
        try:
            return is_text_file(path)
        except OSError as e:
            logger.warning("Cannot read %s, reporting it as binary: %s", path, e)
            return False

    def collect(self, directory: PathType) -> Tuple[List[FileRecord], List[FileRecord]]:
        """Walk ``directory`` and return the included and excluded entries.

        Both lists are sorted by relative path. Included files carry the result of
        content sniffing in ``is_text``; directories and excluded entries are never
        sniffed.

        Raises:
            DirectoryNotFoundError: If ``directory`` does not exist.
            ScanError: If a directory cannot be listed during the walk.
        """
        root = self._resolve_root(directory)
        included: List[FileRecord] = []
        excluded: List[FileRecord] = []

        for path, is_dir, reason in self._walk(root):
            rel_path = relative_path(path, root)
            if rel_path == ".":
                # A file target is shown under its own name
                rel_path = os.path.basename(path)
            if reason is not None:
                excluded.append(FileRecord(path, rel_path, is_dir=is_dir, excluded=True, reason=reason))
            else:
                is_text = False if is_dir else self._sniff(path)
                included.append(FileRecord(path, rel_path, is_dir=is_dir, is_text=is_text))

        included.sort(key=lambda r: r.relative_path)
        excluded.sort(key=lambda r: r.relative_path)
        return included, excluded

    def dry_run(self, directory: PathType, sink: Sink) -> None:
        """Report which entries a scan would process and which it would exclude.

        Output format::

            Dry run for directory: src

            Files that would be processed:
              ├── utils/
              │   └── helpers.py
              ├── main.py
              └── logo.png (binary, will be skipped)

            Files that would be excluded:
              ├── __pycache__/ [Python: __pycache__]
              └── debug.log [LaTeX: *.log]

        Nothing is written if the walk fails.

        Raises:
            DirectoryNotFoundError: If ``directory`` does not exist.
            ScanError: If a directory cannot be listed during the walk.
        """
        included, excluded = self.collect(directory)

        lines = [f"Dry run for directory: {os.fspath(directory)}", "", "Files that would be processed:"]
        lines.extend(render_tree(build_tree(included)) if included else ["  (none)"])
        lines.extend(["", "Files that would be excluded:"])
        lines.extend(render_tree(build_tree(excluded), show_reasons=True) if excluded else ["  (none)"])

        for line in lines:
            sink.write(_encode(line) + b"\n")
