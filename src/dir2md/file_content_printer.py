"""File content printer with streaming support.

This module reproduces the text of every content-included file, one line at a time,
wrapped by an output strategy. A file that cannot be read does not stop the run: its
block records an error marker and the next file follows.
"""

import logging
from typing import Iterator, Tuple, Union

from .file_system_tree.file_system_tree import FileSystemTree
from .language import guess_language
from .output_strategies.base_strategy import OutputStrategy
from .output_strategies.markdown_strategy import MarkdownOutputStrategy
from .types import ContentFile

logger = logging.getLogger(__name__)

ERROR_HANDLERS = ("surrogateescape", "strict", "ignore", "replace")


class FileContentPrinter:
    """Streams file content with consistent formatting.

    Files are taken from the tree's content list in sorted relative-path order. Each
    file's block is produced lazily: the file is opened only when its chunk iterator
    is consumed, and closed before the next file is opened. Lines are split on ``\\n``
    only, so a lone ``\\r`` stays part of the text, and undecodable bytes are kept as
    surrogate escapes for the writer to restore. A missing final newline is supplied.

    Attributes:
        fs_tree (FileSystemTree): The filesystem tree to process.
        output_strategy (OutputStrategy): Strategy for formatting the output.
        encoding (str): The encoding to use when reading files.
        errors (str): How to handle decoding errors when reading files.

    Example:
        >>> from dir2md.file_system_tree.file_system_tree import FileSystemTree
        >>> tree = FileSystemTree("src")  # doctest: +SKIP
        >>> printer = FileContentPrinter(tree)  # doctest: +SKIP
        >>> for path, rel_path, chunks in printer.yield_file_contents():  # doctest: +SKIP
        ...     for chunk in chunks:
        ...         print(chunk, end='')
    """

    def __init__(
        self,
        fs_tree: FileSystemTree,
        output_format: Union[str, OutputStrategy] = "markdown",
        encoding: str = "utf-8",
        errors: str = "surrogateescape",
    ) -> None:
        """Initialize the FileContentPrinter.

        Args:
            fs_tree: The filesystem tree to process.
            output_format: Either "markdown" or an OutputStrategy instance.
                Defaults to "markdown".
            encoding: The encoding to use when reading files. Defaults to "utf-8".
            errors: How to handle decoding errors. Must be one of "surrogateescape" (bytes
                are carried through unchanged), "strict" (the file is reported as
                unreadable), "ignore" or "replace". Defaults to "surrogateescape".

        Raises:
            ValueError: If output_format is an unknown string or errors is invalid.
            TypeError: If output_format is neither a string nor an OutputStrategy.
            LookupError: If the specified encoding is not available.
        """
        if errors not in ERROR_HANDLERS:
            raise ValueError(f"Invalid error handler '{errors}'. Must be one of: {', '.join(ERROR_HANDLERS)}")

        try:
            "test".encode(encoding).decode(encoding)
        except LookupError as e:
            raise LookupError(f"Encoding '{encoding}' is not available") from e

        self.fs_tree = fs_tree
        self.encoding = encoding
        self.errors = errors

        if isinstance(output_format, str):
            if output_format.lower() != "markdown":
                raise ValueError(f"Unsupported output format: {output_format}. Must be: markdown")
            self.output_strategy: OutputStrategy = MarkdownOutputStrategy()
        elif isinstance(output_format, OutputStrategy):
            self.output_strategy = output_format
        else:
            raise TypeError("output_format must be either 'markdown' or an OutputStrategy instance")

    def _yield_wrapped_content(self, content_file: ContentFile) -> Iterator[str]:
        """Stream a single file's block.

        Yields:
            str: The block opening, one formatted chunk per line (or an error marker),
                and the block closing.
        """
        strategy = self.output_strategy
        yield strategy.format_start(content_file.relative_path, guess_language(content_file.relative_path))

        try:
            with open(content_file.path, "r", encoding=self.encoding, errors=self.errors, newline="\n") as file:
                for line in file:
                    yield strategy.format_content(line)
        except (OSError, UnicodeError) as e:
            logger.warning("Failed to read '%s': %s", content_file.relative_path, e)
            yield strategy.format_error(str(e))

        yield strategy.format_end()

    def yield_file_contents(self) -> Iterator[Tuple[str, str, Iterator[str]]]:
        """Stream file blocks with their paths.

        Yields:
            Tuples of (absolute_path, relative_path, chunk_iterator) in sorted
            relative-path order.

        Raises:
            FileNotFoundError: If the tree's root path doesn't exist.
            TreeBuildError: If the tree has not been built yet and the walk fails.
        """
        for content_file in self.fs_tree.iterate_files():
            yield content_file.path, content_file.relative_path, self._yield_wrapped_content(content_file)

    def get_output_file_extension(self) -> str:
        """Get the appropriate file extension for the current output format."""
        return self.output_strategy.get_file_extension()
