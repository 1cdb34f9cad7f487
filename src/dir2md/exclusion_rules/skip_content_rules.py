"""Skip-content rules: case-insensitive base-name globs."""

from typing import List, Optional, Sequence

from .base_rules import BaseExclusionRules
from .matching import compile_pattern, matches_skip_content

# Files that appear in the tree but whose contents never go into the document.
DEFAULT_SKIP_CONTENT_PATTERNS = (
    "*.png",
    "*.jpg",
    "*.jpeg",
    "*.gif",
    "*.svg",
    "*.webp",
    "package-lock.json",
    "composer.lock",
)


class SkipContentRules(BaseExclusionRules):
    """Rules deciding which retained files have their contents left out.

    Only the base name of a path is examined, and matching ignores case: ``PHOTO.JPG``
    matches ``*.jpg`` and ``COMPOSER.LOCK`` matches ``composer.lock``. Matching never
    hides a file from the tree.

    Example:
        >>> rules = SkipContentRules()
        >>> rules.exclude("assets/PHOTO.JPG")
        True
        >>> rules.exclude("photo.jpg.bak")
        False
        >>> SkipContentRules([]).exclude("logo.png")
        False
    """

    def __init__(self, patterns: Optional[Sequence[str]] = None):
        """Initialize SkipContentRules.

        Args:
            patterns: Initial patterns. Defaults to DEFAULT_SKIP_CONTENT_PATTERNS; pass an
                empty sequence to start with no patterns.
        """
        self._patterns: List[str] = []

        if patterns is None:
            patterns = DEFAULT_SKIP_CONTENT_PATTERNS
        for pattern in patterns:
            self.add_rule(pattern)

    @property
    def patterns(self) -> List[str]:
        return list(self._patterns)

    def exclude(self, path: str, is_dir: bool = False) -> bool:
        """Check whether a file's contents should be skipped.

        Args:
            path: Relative path or file name; only the base name is compared.
            is_dir: Unused; only files are content candidates.

        Returns:
            bool: True if the base name matches a pattern, ignoring case.
        """
        return matches_skip_content(path, self._patterns)

    def add_rule(self, rule: str) -> None:
        """Append a single skip-content pattern.

        Args:
            rule: A base-name glob such as ``*.pdf`` or ``yarn.lock``.
        """
        compile_pattern(rule.lower())
        self._patterns.append(rule)
