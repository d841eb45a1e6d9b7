from typing import Sequence

from .types import PathType


class CatalogError(Exception):
    """
    Exception raised when the bundled exclusion catalog cannot be loaded.

    This covers an unreadable or unparsable ``exclusions.yaml`` as well as entries
    that are missing required fields or reuse an existing category ID.

    Example:
        >>> error = CatalogError("Duplicate category ID: go")
        >>> str(error)
        'Duplicate category ID: go'
    """

    pass


class InvalidCategoryError(ValueError):
    """
    Exception raised when a caller references exclusion categories that do not exist.

    This is a configuration error: it is raised before any directory traversal starts.

    Attributes:
        invalid_ids (list[str]): The unknown category IDs, in the order they were given.

    Example:
        >>> error = InvalidCategoryError(["nope", "nada"])
        >>> str(error)
        "invalid category IDs: nope, nada. Use 'list-exclusions' to see valid IDs"
        >>> error.invalid_ids
        ['nope', 'nada']
    """

    def __init__(self, invalid_ids: Sequence[str]) -> None:
        """
        Initialize the exception with the offending IDs.

        Args:
            invalid_ids (Sequence[str]): Category IDs that are not present in the catalog.
        """
        self.invalid_ids = list(invalid_ids)
        label = "category ID" if len(self.invalid_ids) == 1 else "category IDs"
        super().__init__(f"invalid {label}: {', '.join(self.invalid_ids)}. Use 'list-exclusions' to see valid IDs")


class DirectoryNotFoundError(FileNotFoundError):
    """
    Exception raised when the directory to scan does not exist.

    Attributes:
        directory (str): The directory as it was given by the caller.

    Example:
        >>> error = DirectoryNotFoundError("missing")
        >>> str(error)
        'directory "missing" does not exist'
    """

    def __init__(self, directory: PathType) -> None:
        self.directory = str(directory)
        super().__init__(f'directory "{self.directory}" does not exist')

    def __str__(self) -> str:
        return str(self.args[0])


class ScanError(OSError):
    """
    Exception raised when an I/O operation fails while walking or rendering a directory.

    The original error is always available as ``__cause__``. Whatever was written to the
    output sink before the failure is left in place.

    Attributes:
        path (str): The file or directory that could not be read.

    Example:
        >>> error = ScanError("/data/secret.txt", PermissionError(13, "Permission denied"))
        >>> str(error)
        'error reading "/data/secret.txt": [Errno 13] Permission denied'
    """

    def __init__(self, path: PathType, cause: BaseException) -> None:
        self.path = str(path)
        errno = getattr(cause, "errno", None)
        super().__init__(errno, f'error reading "{self.path}": {cause}')
        self.__cause__ = cause

    def __str__(self) -> str:
        return str(self.args[1])
