"""Code-fence language tags derived from file extensions."""

import posixpath

# Lower-cased extension -> Markdown code-fence language tag.
LANGUAGE_MAP = {
    ".go": "go",
    ".py": "python",
    ".js": "javascript",
    ".jsx": "jsx",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".java": "java",
    ".rs": "rust",
    ".sh": "bash",
    ".rb": "ruby",
    ".php": "php",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
    ".md": "markdown",
}


def guess_language(path: str) -> str:
    """Guess the code-fence language for a file from its extension.

    Args:
        path: File name or forward-slash relative path.

    Returns:
        The language tag, or an empty string for unknown extensions.

    Example:
        >>> guess_language("cmd/main.go")
        'go'
        >>> guess_language("script.JS")
        'javascript'
        >>> guess_language("unknownfile.xyz")
        ''
    """
    _, extension = posixpath.splitext(path)
    return LANGUAGE_MAP.get(extension.lower(), "")
