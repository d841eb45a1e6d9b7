"""Node representation for dry-run report trees."""

from typing import Any, Optional

from anytree import Node

from .file_record import FileRecord


class TreeNode(Node):  # type: ignore
    """Node class representing one path component in a dry-run report tree.

    Extends anytree.Node with the record of the entry the node stands for. Nodes that
    only exist because a deeper entry passes through them (for example the ``src``
    directory of an included ``src/main.py`` when ``src`` itself was never recorded)
    carry no record.

    Attributes:
        name (str): The path component (just the basename).
        record (Optional[FileRecord]): The visited entry, if this node is one.
        is_dir (bool): True if this node represents a directory.
        children (tuple[TreeNode]): The child nodes (inherited from anytree.Node).

    Example:
        >>> root = TreeNode("", is_dir=True)
        >>> child = TreeNode("main.py", parent=root)
        >>> child.parent is root
        True
        >>> child.is_dir
        False
    """

    def __init__(
        self,
        name: str,
        parent: Optional["TreeNode"] = None,
        record: Optional[FileRecord] = None,
        is_dir: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.record = record
        self.is_dir = is_dir

    def child_named(self, name: str) -> Optional["TreeNode"]:
        """Return the direct child with the given name, if any."""
        for child in self.children:
            if child.name == name:
                return child  # type: ignore[no-any-return]
        return None

    @property
    def label(self) -> str:
        """The node name as displayed in a report, with type annotations.

        Directories get a trailing slash. Included files that sniff as binary are marked
        as skipped, since rendering never emits them.
        """
        if self.record is not None:
            if self.record.is_dir:
                return f"{self.name}/"
            if not self.record.is_text and not self.record.excluded:
                return f"{self.name} (binary, will be skipped)"
            return str(self.name)
        if self.is_dir:
            return f"{self.name}/"
        return str(self.name)
