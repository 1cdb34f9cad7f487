"""Node representation for file system entries in the tree."""

from typing import Any, List, Optional

from anytree import Node


class FileSystemNode(Node):  # type: ignore
    """Node class representing a retained file or directory.

    Extends anytree.Node with a directory flag. Children of a directory node are kept
    in ordinal name order by the tree builder; file nodes never have children.

    Attributes:
        name (str): The base name of the entry.
        parent (Optional[FileSystemNode]): The parent node in the tree.
        is_dir (bool): True if this node represents a directory.
        children (tuple[FileSystemNode]): The child nodes (inherited from anytree.Node).

    Example:
        >>> root = FileSystemNode("root", is_dir=True)
        >>> child = FileSystemNode("main.go", parent=root)
        >>> [node.name for node in root.children]
        ['main.go']
        >>> child.is_dir
        False
    """

    def __init__(
        self,
        name: str,
        parent: Optional["FileSystemNode"] = None,
        is_dir: bool = False,
        **kwargs: Any,
    ) -> None:
        """Initialize a FileSystemNode.

        Args:
            name: The base name of the file or directory. Must not be empty.
            parent: The parent node. Defaults to None.
            is_dir: Whether this node represents a directory. Defaults to False.
            **kwargs: Additional arguments passed to anytree.Node.

        Raises:
            ValueError: If name is empty.
        """
        if not name:
            raise ValueError("FileSystemNode name must not be empty")
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir

    @property
    def child_names(self) -> List[str]:
        """Names of the direct children, in order."""
        return [child.name for child in self.children]
