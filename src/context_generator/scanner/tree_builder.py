"""Conversion of flat dry-run records into a printable hierarchy."""

from typing import Iterable, Iterator

from .file_record import FileRecord
from .tree_node import TreeNode

# Prefix of the top level of a rendered tree
ROOT_INDENT = "  "


def insert(root: TreeNode, record: FileRecord) -> None:
    """Insert a record under ``root``, creating intermediate directory nodes.

    The relative path is split on ``/``. Existing nodes are reused for shared prefixes,
    so ``src`` and ``src/main.py`` end up as a parent and its child. The record whose
    relative path is the scan root itself (``.``) is not inserted.
    """
    if record.relative_path in (".", ""):
        return

    parts = record.relative_path.split("/")
    current = root
    for i, part in enumerate(parts):
        is_last = i == len(parts) - 1
        child = current.child_named(part)
        if child is None:
            child = TreeNode(part, parent=current, is_dir=not is_last or record.is_dir)
        if is_last:
            child.record = record
            child.is_dir = record.is_dir
        current = child


def sort(node: TreeNode) -> None:
    """Order children recursively: directories first, then alphabetically by name."""
    node.children = sorted(node.children, key=lambda n: (not n.is_dir, n.name))
    for child in node.children:
        sort(child)


def build_tree(records: Iterable[FileRecord]) -> TreeNode:
    """Build a sorted tree from a flat list of records.

    Returns:
        A nameless root directory node whose descendants are the records.

    Example:
        >>> records = [
        ...     FileRecord("/p/src/main.py", "src/main.py", is_text=True),
        ...     FileRecord("/p/README.md", "README.md", is_text=True),
        ...     FileRecord("/p/src", "src", is_dir=True),
        ... ]
        >>> root = build_tree(records)
        >>> [child.name for child in root.children]
        ['src', 'README.md']
        >>> [child.name for child in root.children[0].children]
        ['main.py']
    """
    root = TreeNode("", is_dir=True)
    for record in records:
        insert(root, record)
    sort(root)
    return root


def render_tree(root: TreeNode, show_reasons: bool = False) -> Iterator[str]:
    """Generate the lines of a tree, similar to the Unix ``tree`` command.

    The root itself is not printed. Top-level entries are indented by two spaces.

    Args:
        root: Tree produced by :func:`build_tree`.
        show_reasons: Append ``[<category>: <pattern>]`` to excluded entries.

    Yields:
        Lines without trailing newlines.

    Example:
        >>> records = [
        ...     FileRecord("/p/src", "src", is_dir=True),
        ...     FileRecord("/p/src/main.py", "src/main.py", is_text=True),
        ...     FileRecord("/p/logo.png", "logo.png"),
        ... ]
        >>> for line in render_tree(build_tree(records)):
        ...     print(line)
          ├── src/
          │   └── main.py
          └── logo.png (binary, will be skipped)
    """

    def write_node(node: TreeNode, prefix: str, is_last: bool) -> Iterator[str]:
        connector = "└── " if is_last else "├── "
        line = f"{prefix}{connector}{node.label}"
        if show_reasons and node.record is not None and node.record.reason is not None:
            line += f" [{node.record.reason.category}: {node.record.reason.pattern}]"
        yield line

        child_prefix = prefix + ("    " if is_last else "│   ")
        for i, child in enumerate(node.children):
            yield from write_node(child, child_prefix, i == len(node.children) - 1)

    for i, child in enumerate(root.children):
        yield from write_node(child, ROOT_INDENT, i == len(root.children) - 1)
