"""Ignore rules: full-path, case-sensitive glob exclusion."""

from os import PathLike
from typing import List, Optional, Sequence, Union

from dir2md.types import PathType

from .base_rules import BaseExclusionRules
from .matching import compile_pattern, matches_ignore
from .pattern_loader import load_ignore_patterns

DEFAULT_IGNORE_FILE = ".ignore"


class IgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules that remove matching entries from the tree.

    Each pattern is compared against the entire relative path, case-sensitively, with
    ``*`` free to cross ``/``: ``*.log`` matches ``logs/server.log``, but ``secret.txt``
    only matches ``secret.txt`` at the scan root. Trailing-slash patterns such as
    ``build/`` match a directory and everything below it. Any matching pattern excludes
    the path, so pattern order never changes the outcome.

    Pattern files are optional: loading a file that does not exist adds nothing.

    Example:
        >>> rules = IgnoreExclusionRules()
        >>> rules.add_rule("*.log")
        >>> rules.exclude("visibleDir/file.log")
        True
        >>> rules.exclude("error.LOG")
        False
        >>> rules.add_rule("build/")
        >>> rules.exclude("build", is_dir=True)
        True
        >>> rules.exclude("build/output.js")
        True
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize IgnoreExclusionRules, optionally from pattern files.

        Args:
            rules_files: Path(s) to pattern files. Missing files contribute no patterns.
        """
        self._patterns: List[str] = []

        if rules_files is not None:
            self.load_rules(rules_files)

    @property
    def patterns(self) -> List[str]:
        return list(self._patterns)

    def exclude(self, path: str, is_dir: bool = False) -> bool:
        """Check if a relative path matches any ignore pattern.

        Args:
            path: Path relative to the scan root.
            is_dir: Whether the path is a directory, so trailing-slash patterns apply.

        Returns:
            bool: True if the path is ignored.
        """
        return matches_ignore(path, self._patterns, is_dir=is_dir)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns from one or more pattern files.

        Args:
            rules_files: Path-like object or sequence of them. Files that do not exist
                or cannot be read contribute nothing.

        Example:
            >>> import os
            >>> import tempfile
            >>> with tempfile.NamedTemporaryFile(mode='w', delete=False) as f:
            ...     _ = f.write('# comment\\n*.tmp\\n\\n')
            >>> rules = IgnoreExclusionRules(f.name)
            >>> rules.patterns
            ['*.tmp']
            >>> os.unlink(f.name)
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            for pattern in load_ignore_patterns(rules_file):
                self.add_rule(pattern)

    def add_rule(self, rule: str) -> None:
        """Append a single ignore pattern.

        Patterns that cannot be compiled are reported here, kept in ``patterns`` and
        never match.

        Args:
            rule: A glob pattern (e.g. ``*.pyc``, ``docs/*.md``, ``node_modules/``).
        """
        compile_pattern(rule)
        self._patterns.append(rule)
