from abc import ABC, abstractmethod
from typing import List, Sequence, Union

from dir2md.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for pattern-based exclusion rules.

    dir2md applies two independent rule sets while walking a tree: ignore rules, which
    remove entries from the tree altogether, and skip-content rules, which keep a file
    in the tree but leave its contents out of the document. Both are ordered lists of
    glob patterns behind this interface; they differ only in how a path is compared
    against the patterns.

    Example:
        >>> from dir2md.exclusion_rules.ignore_rules import IgnoreExclusionRules
        >>> rules = IgnoreExclusionRules()
        >>> rules.add_rule('*.log')
        >>> rules.exclude('logs/server.log')
        True
        >>> rules.patterns
        ['*.log']
    """

    @abstractmethod
    def exclude(self, path: str, is_dir: bool = False) -> bool:
        """
        Determine if a given path matches any of the loaded patterns.

        Args:
            path (str): Forward-slash path relative to the scan root.
            is_dir (bool): Whether the path names a directory.

        Returns:
            bool: True if the path matches, False otherwise.
        """
        pass

    @property
    @abstractmethod
    def patterns(self) -> List[str]:
        """A copy of the patterns in the order they were added."""
        pass

    def has_rules(self) -> bool:
        """Check whether any pattern has been added.

        Returns:
            True if at least one pattern is present.
        """
        return bool(self.patterns)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load patterns from one or more files.

        Rule types that don't read pattern files keep this default, which raises
        NotImplementedError.

        Args:
            rules_files: Path to a file or sequence of paths containing patterns.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    @abstractmethod
    def add_rule(self, rule: str) -> None:
        """
        Add a single pattern.

        Args:
            rule (str): A glob pattern such as ``*.log`` or ``build/``.
        """
        pass
