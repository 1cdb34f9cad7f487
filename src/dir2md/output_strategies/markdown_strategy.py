from .base_strategy import OutputStrategy

FENCE = "```"


class MarkdownOutputStrategy(OutputStrategy):
    """Markdown document formatting.

    The tree is placed in a bare code fence and each file gets a ``###`` heading
    followed by a code fence tagged with its language.

    Example:
        >>> strategy = MarkdownOutputStrategy()
        >>> strategy.format_start("cmd/main.go", "go")
        '### cmd/main.go\\n```go\\n'
        >>> strategy.format_content("package main")
        'package main\\n'
        >>> strategy.format_end()
        '```\\n\\n'
    """

    def format_tree_start(self) -> str:
        return f"{FENCE}\n"

    def format_tree_end(self) -> str:
        return f"{FENCE}\n"

    def format_contents_heading(self) -> str:
        return "\n## Full File List\n\n"

    def format_start(self, relative_path: str, language: str = "") -> str:
        return f"### {relative_path}\n{FENCE}{language}\n"

    def format_content(self, line: str) -> str:
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        return line + "\n"

    def format_error(self, message: str) -> str:
        return f"Error reading file: {message}\n"

    def format_end(self) -> str:
        return f"{FENCE}\n\n"

    def get_file_extension(self) -> str:
        return ".md"
