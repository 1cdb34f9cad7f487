"""Output strategy base class defining the interface for document formatting.

A document has two parts: the rendered tree and the content section. The tree is
wrapped by format_tree_start() and format_tree_end(). The content section opens with
format_contents_heading() and then holds one block per file:

1. Start - format_start() outputs the heading and opening wrapper for a file
2. Content - format_content() formats each line of the file, or format_error()
   reports why the file could not be read
3. End - format_end() closes the block
"""

from abc import ABC, abstractmethod


class OutputStrategy(ABC):
    """Abstract base class for document formatting strategies.

    Example:
        >>> class PlainStrategy(OutputStrategy):
        ...     def format_tree_start(self) -> str:
        ...         return ""
        ...     def format_tree_end(self) -> str:
        ...         return ""
        ...     def format_contents_heading(self) -> str:
        ...         return "\\n"
        ...     def format_start(self, relative_path: str, language: str = "") -> str:
        ...         return f"== {relative_path} ==\\n"
        ...     def format_content(self, line: str) -> str:
        ...         return line if line.endswith("\\n") else line + "\\n"
        ...     def format_error(self, message: str) -> str:
        ...         return f"!! {message}\\n"
        ...     def format_end(self) -> str:
        ...         return "\\n"
        ...     def get_file_extension(self) -> str:
        ...         return ".txt"
        >>> PlainStrategy().format_start("main.go")
        '== main.go ==\\n'
    """

    @abstractmethod
    def format_tree_start(self) -> str:
        """Format the text placed before the rendered tree."""
        pass

    @abstractmethod
    def format_tree_end(self) -> str:
        """Format the text placed after the rendered tree."""
        pass

    @abstractmethod
    def format_contents_heading(self) -> str:
        """Format the heading that opens the content section."""
        pass

    @abstractmethod
    def format_start(self, relative_path: str, language: str = "") -> str:
        """Format the opening of a file's block.

        Args:
            relative_path: The relative path of the file being formatted.
            language: Language tag for the file, or an empty string.

        Returns:
            str: The formatted opening.
        """
        pass

    @abstractmethod
    def format_content(self, line: str) -> str:
        """Format one line of file content.

        Args:
            line: A line of the file, with or without its trailing newline.

        Returns:
            str: The formatted line, always ending with exactly one newline.
        """
        pass

    @abstractmethod
    def format_error(self, message: str) -> str:
        """Format the marker recorded when a file cannot be read.

        Args:
            message: Description of the failure.

        Returns:
            str: The formatted marker.
        """
        pass

    @abstractmethod
    def format_end(self) -> str:
        """Format the closing of a file's block."""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get the file extension for documents in this format, including the dot."""
        pass
