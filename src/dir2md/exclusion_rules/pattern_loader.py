"""Loading of ignore-pattern files."""

import logging
from pathlib import Path
from typing import List

from dir2md.types import PathType

logger = logging.getLogger(__name__)


def parse_pattern_lines(lines: List[str]) -> List[str]:
    """Extract patterns from the lines of a pattern file.

    Each line is trimmed; empty lines and lines starting with ``#`` are dropped and
    the rest are kept in order.

    Example:
        >>> parse_pattern_lines(["# logs", "*.log", "", "  build/  "])
        ['*.log', 'build/']
    """
    patterns = []
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        patterns.append(stripped)
    return patterns


def load_ignore_patterns(path: PathType) -> List[str]:
    """Read glob patterns from an ignore file.

    A file that does not exist or cannot be opened yields an empty list: a missing
    ignore file simply means nothing is ignored.

    Args:
        path: Location of the pattern file. Can be any path-like object.

    Returns:
        The patterns in file order.
    """
    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as e:
        logger.debug("No ignore patterns loaded from %s: %s", path, e)
        return []

    patterns = parse_pattern_lines(lines)
    logger.debug("Loaded %d ignore pattern(s) from %s", len(patterns), path)
    return patterns
