"""ASCII rendering of a FileSystemNode tree.

Each entry occupies one line in preorder. A node is drawn with ``└── `` when it is
the last of its siblings and ``├── `` otherwise; below it, its children are indented
by ``    `` or ``│   `` respectively. The root is drawn as a last sibling.

Example:
    >>> from dir2md.file_system_tree.file_system_node import FileSystemNode
    >>> root = FileSystemNode("project", is_dir=True)
    >>> src = FileSystemNode("src", parent=root, is_dir=True)
    >>> _ = FileSystemNode("main.go", parent=src)
    >>> _ = FileSystemNode("README.md", parent=root)
    >>> print("\\n".join(render_tree(root)))
    └── project
        ├── src
        │   └── main.go
        └── README.md
"""

from typing import Iterator, List

from .file_system_node import FileSystemNode

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_INDENT = "│   "
SPACE_INDENT = "    "


def stream_tree_lines(node: FileSystemNode, prefix: str = "", is_last: bool = True) -> Iterator[str]:
    """Yield the lines for ``node`` and its descendants, without newlines.

    Args:
        node: Node to render.
        prefix: Indentation inherited from the ancestors.
        is_last: Whether ``node`` is the last of its siblings.
    """
    connector = LAST_BRANCH if is_last else BRANCH
    yield f"{prefix}{connector}{node.name}"

    if not node.is_dir:
        return

    child_prefix = prefix + (SPACE_INDENT if is_last else PIPE_INDENT)
    children = node.children
    for i, child in enumerate(children):
        yield from stream_tree_lines(child, child_prefix, i == len(children) - 1)


def render_tree(root: FileSystemNode) -> List[str]:
    """Render a whole tree as a list of lines, without newlines."""
    return list(stream_tree_lines(root))
