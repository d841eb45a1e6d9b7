from os import PathLike
from typing import Any, Protocol, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class Sink(Protocol):
    """Append-only binary output stream: a file, ``sys.stdout.buffer``, ``io.BytesIO``..."""

    def write(self, data: bytes, /) -> Any: ...
