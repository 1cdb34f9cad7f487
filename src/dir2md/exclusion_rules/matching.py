"""Glob matching for ignore and skip-content patterns.

Two policies share one glob engine but differ in what they look at:

- Ignore matching compares the whole forward-slash relative path, case-sensitively.
  ``*`` and ``?`` may cross ``/``, so ``*.log`` matches ``visibleDir/file.log`` while
  ``secret.txt`` only matches a ``secret.txt`` at the scan root. A trailing-slash
  pattern such as ``build/`` matches the directory in its ``build/`` form and every
  path beneath it, never a file named ``build``.
- Skip-content matching compares only the lower-cased base name against lower-cased
  patterns.

Patterns that cannot be compiled, comments, blank strings and negations never match.
"""

import logging
import os
import posixpath
import re
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from pathspec import PathSpec
from pathspec.pattern import RegexPattern

logger = logging.getLogger(__name__)


class GlobPatternError(ValueError):
    """Raised for a glob pattern that cannot be translated."""


def _translate_class(body: str) -> str:
    """Translate the inside of a bracket class, keeping ``-`` as the range operator."""
    out = []
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\" and i + 1 < len(body):
            i += 1
            out.append(re.escape(body[i]))
        elif char == "-":
            out.append("-")
        else:
            out.append(re.escape(char))
        i += 1
    return "".join(out)


class GlobPattern(RegexPattern):
    """A shell glob compared against an entire path string.

    ``*`` matches any run of characters and ``?`` exactly one, both including ``/``.
    Bracket classes (``[abc]``, ``[a-z]``, ``[!abc]`` or ``[^abc]``) match one character
    and ``\\`` escapes the next character. A trailing ``/`` turns the pattern into a
    directory prefix.

    Example:
        >>> bool(GlobPattern("*.log").match_file("visibleDir/file.log"))
        True
        >>> bool(GlobPattern("secret.txt").match_file("sub/secret.txt"))
        False
        >>> bool(GlobPattern("build/").match_file("build/out.js"))
        True
    """

    @classmethod
    def pattern_to_regex(cls, pattern: str) -> Tuple[str, bool]:
        """Convert the glob into a regular expression anchored at both ends.

        Raises:
            GlobPatternError: For an unclosed bracket class or a dangling escape.
        """
        parts = []
        i = 0
        n = len(pattern)
        while i < n:
            char = pattern[i]
            i += 1
            if char == "*":
                while i < n and pattern[i] == "*":
                    i += 1
                parts.append(".*")
            elif char == "?":
                parts.append(".")
            elif char == "[":
                j = i
                if j < n and pattern[j] in "!^":
                    j += 1
                # A "]" directly after the opening bracket is a member
                if j < n and pattern[j] == "]":
                    j += 1
                while j < n and pattern[j] != "]":
                    if pattern[j] == "\\":
                        j += 1
                    j += 1
                if j >= n:
                    raise GlobPatternError(f"unclosed character class in {pattern!r}")
                body = pattern[i:j]
                i = j + 1
                negate = body[:1] in ("!", "^")
                if negate:
                    body = body[1:]
                parts.append("[" + ("^" if negate else "") + _translate_class(body) + "]")
            elif char == "\\":
                if i >= n:
                    raise GlobPatternError(f"dangling escape in {pattern!r}")
                parts.append(re.escape(pattern[i]))
                i += 1
            else:
                parts.append(re.escape(char))

        if pattern.endswith("/"):
            parts.append(".*")
        return "(?s)" + "".join(parts) + r"\Z", True


@lru_cache(maxsize=None)
def compile_pattern(pattern: str) -> Optional[GlobPattern]:
    """Compile a single glob pattern.

    Results are cached, so each unusable pattern is reported only once per process.

    Args:
        pattern: A glob pattern such as ``*.log`` or ``build/``.

    Returns:
        The compiled pattern, or None if the pattern can never match.

    Example:
        >>> compile_pattern("*.log") is not None
        True
        >>> compile_pattern("# just a comment") is None
        True
    """
    stripped = pattern.strip()
    if not stripped or stripped.startswith("#"):
        return None
    if stripped.startswith("!"):
        logger.warning("Ignoring negated pattern %r: re-inclusion is not supported", pattern)
        return None

    try:
        return GlobPattern(pattern)
    except (GlobPatternError, re.error) as e:
        logger.warning("Ignoring malformed pattern %r: %s", pattern, e)
        return None


def build_spec(patterns: Iterable[str], fold_case: bool = False) -> PathSpec:
    """Build a PathSpec from the usable patterns in ``patterns``.

    Args:
        patterns: Glob pattern strings, in order.
        fold_case: Lower-case every pattern before compiling.

    Returns:
        A PathSpec that matches a path if any usable pattern matches it.
    """
    compiled = []
    for pattern in patterns:
        if fold_case:
            pattern = pattern.lower()
        result = compile_pattern(pattern)
        if result is not None:
            compiled.append(result)
    return PathSpec(compiled)


@lru_cache(maxsize=128)
def _cached_spec(patterns: Tuple[str, ...], fold_case: bool) -> PathSpec:
    return build_spec(patterns, fold_case=fold_case)


def normalize_relative_path(relative_path: str) -> str:
    """Convert a relative path using the platform separator to forward-slash form."""
    if os.sep == "/":
        return relative_path
    return relative_path.replace(os.sep, "/")


def matches_ignore(relative_path: str, patterns: List[str], is_dir: bool = False) -> bool:
    """Check a path relative to the scan root against ignore patterns.

    Args:
        relative_path: Path from the scan root, e.g. ``visibleDir/file.log``.
        patterns: Ignore patterns. An empty list matches nothing.
        is_dir: Whether the path names a directory. Directories are also tested in
            their ``name/`` form so that trailing-slash patterns apply to them.

    Returns:
        True if any pattern matches.

    Example:
        >>> matches_ignore("visibleDir/file.log", ["*.log"])
        True
        >>> matches_ignore("sub/secret.txt", ["secret.txt"])
        False
        >>> matches_ignore("error.LOG", ["*.log"])
        False
        >>> matches_ignore("build", ["build/"], is_dir=True)
        True
    """
    if not patterns:
        return False

    spec = _cached_spec(tuple(patterns), False)
    path = normalize_relative_path(relative_path)
    if spec.match_file(path):
        return True
    return is_dir and not path.endswith("/") and spec.match_file(path + "/")


def matches_skip_content(relative_path: str, patterns: List[str]) -> bool:
    """Check whether a file's base name matches a skip-content pattern.

    Only the final path segment is considered, and both sides are lower-cased.

    Args:
        relative_path: Path from the scan root, or just a file name.
        patterns: Skip-content patterns. An empty list matches nothing.

    Returns:
        True if the file's contents should be left out of the document.

    Example:
        >>> matches_skip_content("assets/PHOTO.JPG", ["*.jpg"])
        True
        >>> matches_skip_content("photo.jpg.bak", ["*.jpg"])
        False
    """
    if not patterns:
        return False

    base_name = posixpath.basename(normalize_relative_path(relative_path)).lower()
    if not base_name:
        return False
    return bool(_cached_spec(tuple(patterns), True).match_file(base_name))
