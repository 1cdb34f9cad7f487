"""Directory to Markdown conversion with streaming support.

This module provides the classes that assemble the final document: the rendered tree
followed, for Markdown output, by one block per content-included file. Both a
streaming and an eager implementation are provided.
"""

from pathlib import Path
from typing import Collection, Iterator, Optional

from dir2md.exclusion_rules.base_rules import BaseExclusionRules
from dir2md.file_content_printer import FileContentPrinter
from dir2md.file_system_tree.file_system_tree import FileSystemTree
from dir2md.output_strategies.base_strategy import OutputStrategy
from dir2md.output_strategies.markdown_strategy import MarkdownOutputStrategy
from dir2md.types import PathType

OUTPUT_FORMATS = ("markdown", "text")


class StreamingDir2Md:
    """Streaming document assembler.

    The directory is walked once, during construction, so structural errors surface
    before any output is produced and the directory/file counts are available
    immediately. The tree and the file contents are then streamed separately.

    Streaming properties:
    - Each streaming operation (tree, contents) can only be performed once
    - line_count and character_count grow as output is streamed
    - With output_format "text" only the bare tree is produced; stream_contents()
      yields nothing

    Attributes:
        directory (Path): Directory (or file) being processed.
        output_format (str): "markdown" or "text".
        fence_tree (bool): Whether a Markdown tree is wrapped in a code fence.
        streaming_complete (bool): Whether all streaming operations have finished.

    Example:
        >>> analyzer = StreamingDir2Md("src")  # doctest: +SKIP
        >>> for line in analyzer.stream_tree():  # doctest: +SKIP
        ...     print(line, end='')
        ```
        └── src
            └── main.go
        ```

    Raises:
        ValueError: If output format is unsupported.
        FileNotFoundError: If the directory does not exist.
        TreeBuildError: If the directory tree cannot be walked.
    """

    def __init__(
        self,
        directory: PathType,
        *,
        ignore_rules: Optional[BaseExclusionRules] = None,
        skip_content_rules: Optional[BaseExclusionRules] = None,
        output_format: str = "markdown",
        fence_tree: bool = True,
        exclude_paths: Collection[PathType] = (),
        encoding: str = "utf-8",
    ):
        """Initialize the assembler and walk the directory.

        Args:
            directory: Directory to process. Can be any path-like object.
            ignore_rules: Rules removing entries from the tree. If None, nothing is ignored.
            skip_content_rules: Rules leaving file contents out of the document. If None,
                the built-in skip-content patterns apply.
            output_format: "markdown" (tree plus contents) or "text" (tree only).
            fence_tree: Wrap the tree in a code fence for Markdown output.
            exclude_paths: Paths that never appear in the output, such as the output file.
            encoding: Encoding used to read file contents.

        Raises:
            ValueError: If output format is unsupported.
            FileNotFoundError: If the directory does not exist.
            TreeBuildError: If the directory tree cannot be walked.
        """
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unsupported output format: {output_format}")

        self.directory = Path(directory)
        self.output_format = output_format
        self.fence_tree = fence_tree

        self._fs_tree = FileSystemTree(
            self.directory,
            ignore_rules,
            skip_content_rules=skip_content_rules,
            exclude_paths=exclude_paths,
        )

        self._strategy: OutputStrategy = MarkdownOutputStrategy()
        self._content_printer = FileContentPrinter(self._fs_tree, self._strategy, encoding=encoding)

        # Walk now so failures are raised before any output
        self._directory_count = self._fs_tree.get_directory_count()
        self._file_count = self._fs_tree.get_file_count()
        self._content_file_count = len(self._fs_tree.get_content_files())

        self._line_count = 0
        self._character_count = 0
        self._tree_complete = False
        self._contents_complete = False

    @property
    def directory_count(self) -> int:
        """Number of directories in the tree, excluding the root."""
        return self._directory_count

    @property
    def file_count(self) -> int:
        """Number of files in the tree, including those whose contents are skipped."""
        return self._file_count

    @property
    def content_file_count(self) -> int:
        """Number of files whose contents go into the document."""
        return self._content_file_count

    @property
    def line_count(self) -> int:
        """Number of output lines streamed so far."""
        return self._line_count

    @property
    def character_count(self) -> int:
        """Number of output characters streamed so far."""
        return self._character_count

    @property
    def streaming_complete(self) -> bool:
        """Whether both the tree and the contents have been streamed."""
        return self._tree_complete and self._contents_complete

    @property
    def includes_contents(self) -> bool:
        """Whether this output format carries a content section."""
        return self.output_format == "markdown"

    def _count_and_yield(self, text: str) -> str:
        """Count text and return it for yielding."""
        self._line_count += text.count("\n")
        self._character_count += len(text)
        return text

    def stream_tree(self) -> Iterator[str]:
        """Stream the rendered tree line by line.

        Returns:
            Iterator yielding lines of the tree, each with a trailing newline, wrapped
            in a code fence for fenced Markdown output.

        Raises:
            RuntimeError: If the tree has already been streamed.
        """
        if self._tree_complete:
            raise RuntimeError("Tree has already been streamed")

        fenced = self.includes_contents and self.fence_tree
        if fenced:
            yield self._count_and_yield(self._strategy.format_tree_start())

        for line in self._fs_tree.stream_tree_representation():
            yield self._count_and_yield(line + "\n")

        if fenced:
            yield self._count_and_yield(self._strategy.format_tree_end())
        self._tree_complete = True

    def stream_contents(self) -> Iterator[str]:
        """Stream the content section chunk by chunk.

        Returns:
            Iterator yielding the section heading and each file's formatted block.

        Raises:
            RuntimeError: If contents have already been streamed.
        """
        if self._contents_complete:
            raise RuntimeError("Contents have already been streamed")

        if self.includes_contents:
            yield self._count_and_yield(self._strategy.format_contents_heading())
            for _file_path, _relative_path, chunks in self._content_printer.yield_file_contents():
                for chunk in chunks:
                    yield self._count_and_yield(chunk)

        self._contents_complete = True


class Dir2Md(StreamingDir2Md):
    """Document assembler that produces everything during initialization.

    This class extends StreamingDir2Md but streams the tree and contents into strings
    right away. It needs enough memory to hold the complete document; use
    StreamingDir2Md for large directories.

    Example:
        >>> analyzer = Dir2Md("src")  # doctest: +SKIP
        >>> print(analyzer.document)  # doctest: +SKIP
    """

    def __init__(
        self,
        directory: PathType,
        *,
        ignore_rules: Optional[BaseExclusionRules] = None,
        skip_content_rules: Optional[BaseExclusionRules] = None,
        output_format: str = "markdown",
        fence_tree: bool = True,
        exclude_paths: Collection[PathType] = (),
        encoding: str = "utf-8",
    ):
        """Initialize and immediately produce the whole document.

        Args:
            directory: Directory to process. Can be any path-like object.
            ignore_rules: Rules removing entries from the tree.
            skip_content_rules: Rules leaving file contents out of the document.
            output_format: "markdown" or "text".
            fence_tree: Wrap the tree in a code fence for Markdown output.
            exclude_paths: Paths that never appear in the output.
            encoding: Encoding used to read file contents.
        """
        super().__init__(
            directory,
            ignore_rules=ignore_rules,
            skip_content_rules=skip_content_rules,
            output_format=output_format,
            fence_tree=fence_tree,
            exclude_paths=exclude_paths,
            encoding=encoding,
        )

        self._tree_string = "".join(self.stream_tree())
        self._content_string = "".join(self.stream_contents())

    @property
    def tree_string(self) -> str:
        """The rendered tree, including any fence."""
        return self._tree_string

    @property
    def content_string(self) -> str:
        """The content section; empty for "text" output."""
        return self._content_string

    @property
    def document(self) -> str:
        """The complete document."""
        return self._tree_string + self._content_string
