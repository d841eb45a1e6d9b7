"""Safe output writing utilities for the context-generator CLI.

This module provides a binary sink that the scanner can write to directly, and that
stops cleanly when the output pipe closes or the user interrupts the run.
"""

import errno
import os
import types
from pathlib import Path
from typing import Optional, Type, Union

from context_generator.cli.signal_handler import signal_handler


class SafeWriter:
    """Signal-aware output sink backed by a file descriptor.

    The scanner treats this as an append-only binary stream. Text is accepted as well
    and encoded as UTF-8.

    Attributes:
        file: Either a file path or file descriptor for output.
        fd: The actual file descriptor being written to.
    """

    def __init__(self, file: Union[int, str, Path]):
        """Initialize the safe writer.

        Args:
            file: Either a file descriptor (int) or a path to create or truncate.

        Raises:
            TypeError: If ``file`` is neither a descriptor nor a path.
        """
        self.file = file
        self._closed = False

        if isinstance(file, int):
            self.fd = file
            self._file_obj = None
        elif isinstance(file, (str, os.PathLike)):
            self._file_obj = Path(file).open("wb")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, data: Union[bytes, str]) -> int:
        """Write all of ``data``, checking for pending signals first.

        Returns:
            The number of bytes written.

        Raises:
            BrokenPipeError: If SIGPIPE or SIGINT was received, or the pipe is broken.
            OSError: If an I/O error occurs during writing.
            ValueError: If attempting to write to a closed writer.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if signal_handler.interrupted:
            raise BrokenPipeError()

        payload = data.encode("utf-8") if isinstance(data, str) else data
        view = memoryview(payload)
        try:
            while view:
                written = os.write(self.fd, view)
                view = view[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError()
            raise
        return len(payload)

    def close(self) -> None:
        """Close the file if it was opened by this class.

        The writer is marked as closed even if closing fails with a broken pipe.
        """
        if self._closed:
            return

        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Close resources, giving priority to an exception raised inside the block."""
        try:
            self.close()
        except OSError:
            if exc_type is None:
                raise
