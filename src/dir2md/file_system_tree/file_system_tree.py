"""File system tree representation with hidden-entry, ignore and skip-content filtering.

This module provides the FileSystemTree class, which walks a directory once and keeps
both a filtered tree of FileSystemNode objects and the sorted list of files whose
contents belong in the generated document.
"""

import logging
import os
import stat
from pathlib import Path
from typing import Collection, Iterator, List, Optional, Set, Tuple

from anytree import PreOrderIter

from dir2md.exceptions import TreeBuildError
from dir2md.exclusion_rules.base_rules import BaseExclusionRules
from dir2md.exclusion_rules.skip_content_rules import SkipContentRules
from dir2md.file_system_tree.file_system_node import FileSystemNode
from dir2md.file_system_tree.tree_renderer import stream_tree_lines
from dir2md.types import ContentFile, PathType

logger = logging.getLogger(__name__)

# A node (None when the entry was pruned) and the content paths found beneath it.
NodeResult = Tuple[Optional[FileSystemNode], List[str]]


class FileSystemTree:
    """A filtered tree representation of a directory structure.

    The walk applies three independent policies:

    - Hidden entries: any entry whose own name starts with ``.`` is skipped, together
      with everything below it. Ancestor names are never re-checked.
    - Ignore rules: an entry whose path relative to the root matches the ignore rules
      is skipped before recursion, so an ignored directory costs a single check.
      Directories are checked both as ``rel`` and ``rel/``.
    - Skip-content rules: a retained file matching them stays in the tree but is left
      out of the content list.

    Symbolic links are followed. Every entry is resolved to its canonical path and
    recorded in a visited set for the duration of the walk, so a link back to an
    ancestor, or a second route to an already listed entry, is pruned instead of
    recursed into. Paths in ``exclude_paths`` (typically the output file) are pruned
    the same way.

    Structural failures are fatal: if a path cannot be resolved or a directory cannot
    be listed, TreeBuildError is raised and no partial tree is kept.

    The tree is built lazily on first access and cached; refresh() walks again.

    Attributes:
        root_path (Path): The absolute path to the scan root.
        ignore_rules (Optional[BaseExclusionRules]): Rules removing entries from the tree.
        skip_content_rules (BaseExclusionRules): Rules removing files from the content list.
        exclude_paths (frozenset): Canonical paths that never appear in the tree.

    Example:
        >>> tree = FileSystemTree("src")  # doctest: +SKIP
        >>> print(tree.get_tree_representation())  # doctest: +SKIP
        └── src
            ├── main.go
            └── utils
                └── helpers.go
        >>> tree.get_content_files()  # doctest: +SKIP
        ['main.go', 'utils/helpers.go']
    """

    def __init__(
        self,
        root_path: PathType,
        ignore_rules: Optional[BaseExclusionRules] = None,
        skip_content_rules: Optional[BaseExclusionRules] = None,
        exclude_paths: Collection[PathType] = (),
    ) -> None:
        """Initialize a FileSystemTree.

        Args:
            root_path: Directory (or single file) to represent. Can be any path-like object.
            ignore_rules: Rules for removing entries from the tree. Defaults to None.
            skip_content_rules: Rules for leaving file contents out of the document.
                Defaults to SkipContentRules() with the built-in patterns.
            exclude_paths: Paths that must never appear in the tree, such as the output
                file. They need not exist yet.
        """
        self.root_path = Path(os.path.abspath(root_path))
        self.ignore_rules = ignore_rules
        self.skip_content_rules = skip_content_rules if skip_content_rules is not None else SkipContentRules()
        self.exclude_paths = frozenset(os.path.realpath(p) for p in exclude_paths)
        self._base_path = self.root_path
        self._tree: Optional[FileSystemNode] = None
        self._built = False
        self._content_files: List[str] = []
        self._file_count: int = 0
        self._directory_count: int = 0

    def get_tree(self) -> Optional[FileSystemNode]:
        """Get the root node of the filesystem tree.

        Returns:
            The root node, or None if the root itself was excluded.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            TreeBuildError: If any path cannot be resolved or any directory cannot be listed.
        """
        if not self._built:
            self._build_tree()
        return self._tree

    def get_content_files(self) -> List[str]:
        """Get the relative paths of content-included files, sorted by their bytes.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            TreeBuildError: If the walk fails.
        """
        if not self._built:
            self._build_tree()
        return list(self._content_files)

    def _build_tree(self) -> None:
        """Walk the root path and store the tree, content list and counts.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            TreeBuildError: If the walk fails.
        """
        if not os.path.lexists(self.root_path):
            raise FileNotFoundError(f"Root path does not exist: {self.root_path}")

        # A single-file root is reported relative to its parent directory
        self._base_path = self.root_path if self.root_path.is_dir() else self.root_path.parent

        logger.info("Scanning %s", self.root_path)
        visited: Set[str] = set()
        tree, content_files = self._create_node(self.root_path, visited)

        self._tree = tree
        self._content_files = sorted(content_files, key=os.fsencode)
        self._built = True
        self._count_files_and_directories()
        logger.info(
            "Scanned %d director%s and %d file(s); %d file(s) with content",
            self._directory_count,
            "y" if self._directory_count == 1 else "ies",
            self._file_count,
            len(self._content_files),
        )

    def _relative_path(self, path: Path) -> str:
        """Forward-slash path of ``path`` relative to the base path."""
        return path.relative_to(self._base_path).as_posix()

    def _is_ignored(self, relative_path: str, is_dir: bool) -> bool:
        if self.ignore_rules is None:
            return False
        return self.ignore_rules.exclude(relative_path, is_dir=is_dir)

    def _list_directory(self, path: Path) -> List[Tuple[str, bool]]:
        """List the direct entries of a directory as (name, is_dir) pairs in byte order.

        Raises:
            TreeBuildError: If the directory cannot be listed.
        """
        try:
            with os.scandir(path) as entries:
                listing = [(entry.name, entry.is_dir()) for entry in entries]
            return sorted(listing, key=lambda item: os.fsencode(item[0]))
        except OSError as e:
            raise TreeBuildError(str(path), f"cannot list directory: {e.strerror or e}") from e

    def _create_node(self, path: Path, visited: Set[str]) -> NodeResult:
        """Recursively create the node for ``path`` and collect its content paths."""
        try:
            canonical_path = str(path.resolve(strict=True))
        except (OSError, RuntimeError) as e:
            # RuntimeError is raised for symlink loops on Python < 3.13
            raise TreeBuildError(str(path), f"cannot resolve path: {e}") from e

        if canonical_path in visited:
            logger.debug("Skipping %s: %s was already visited", path, canonical_path)
            return None, []
        if canonical_path in self.exclude_paths:
            logger.debug("Skipping %s: excluded from its own scan", path)
            return None, []
        visited.add(canonical_path)

        try:
            mode = path.stat().st_mode
        except OSError as e:
            raise TreeBuildError(str(path), f"cannot stat path: {e.strerror or e}") from e

        name = path.name or str(path)

        if not stat.S_ISDIR(mode):
            node = FileSystemNode(name, is_dir=False)
            relative_path = self._relative_path(path)
            if self.skip_content_rules.exclude(relative_path):
                logger.debug("Leaving out contents of %s", relative_path)
                return node, []
            return node, [relative_path]

        node = FileSystemNode(name, is_dir=True)
        children: List[FileSystemNode] = []
        content_files: List[str] = []

        for child_name, child_is_dir in self._list_directory(path):
            if child_name.startswith("."):
                continue

            child_path = path / child_name
            child_relative_path = self._relative_path(child_path)
            if self._is_ignored(child_relative_path, child_is_dir):
                logger.debug("Ignoring %s", child_relative_path)
                continue

            child_node, child_content_files = self._create_node(child_path, visited)
            if child_node is not None:
                children.append(child_node)
            content_files.extend(child_content_files)

        node.children = sorted(children, key=lambda child: os.fsencode(child.name))
        return node, content_files

    def _count_files_and_directories(self) -> None:
        """Count retained files and directories. The root directory is not counted."""
        self._file_count = 0
        self._directory_count = 0
        if self._tree is None:
            return

        for node in PreOrderIter(self._tree):
            if node.is_dir:
                self._directory_count += 1
            else:
                self._file_count += 1

        if self._tree.is_dir:
            self._directory_count -= 1

    def get_file_count(self) -> int:
        """Get the number of files in the tree, including content-skipped ones."""
        if not self._built:
            self._build_tree()
        return self._file_count

    def get_directory_count(self) -> int:
        """Get the number of directories in the tree, excluding the root."""
        if not self._built:
            self._build_tree()
        return self._directory_count

    def iterate_files(self) -> Iterator[ContentFile]:
        """Iterate over content-included files in sorted relative-path order.

        Yields:
            ContentFile records of (absolute path, relative path).

        Example:
            >>> tree = FileSystemTree("src")  # doctest: +SKIP
            >>> for content_file in tree.iterate_files():  # doctest: +SKIP
            ...     print(content_file.relative_path)
            main.go
            utils/helpers.go
        """
        for relative_path in self.get_content_files():
            yield ContentFile(str(self._base_path / relative_path), relative_path)

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate the ASCII tree one line at a time, without newlines.

        Yields:
            Lines of the tree in preorder, starting with the root.
        """
        tree = self.get_tree()
        if tree is None:
            return
        yield from stream_tree_lines(tree)

    def get_tree_representation(self) -> str:
        """Get the complete ASCII tree as a single string."""
        return "\n".join(self.stream_tree_representation())

    def refresh(self) -> None:
        """Discard the cached result and walk the filesystem again."""
        self._tree = None
        self._built = False
        self._content_files = []
        self._file_count = 0
        self._directory_count = 0
        self._build_tree()
