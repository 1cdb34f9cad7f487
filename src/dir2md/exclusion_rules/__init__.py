"""Pattern matching and exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .ignore_rules import DEFAULT_IGNORE_FILE, IgnoreExclusionRules
from .matching import matches_ignore, matches_skip_content
from .pattern_loader import load_ignore_patterns
from .skip_content_rules import DEFAULT_SKIP_CONTENT_PATTERNS, SkipContentRules

__all__ = [
    "BaseExclusionRules",
    "DEFAULT_IGNORE_FILE",
    "DEFAULT_SKIP_CONTENT_PATTERNS",
    "IgnoreExclusionRules",
    "SkipContentRules",
    "load_ignore_patterns",
    "matches_ignore",
    "matches_skip_content",
]
