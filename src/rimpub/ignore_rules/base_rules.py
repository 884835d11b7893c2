from abc import ABC, abstractmethod
from typing import Sequence, Union

from rimpub.types import PathType


class BaseIgnoreRules(ABC):
    """
    Abstract base class defining the interface the publish pipeline queries.

    Implementations decide, for a path relative to the source root, whether that path
    should be left out of a publish. Loading rules from files and adding individual
    rules are optional capabilities.

    Example:
        >>> class NoTempFiles(BaseIgnoreRules):
        ...     def matches(self, path, is_dir=False):
        ...         return not is_dir and str(path).endswith(".tmp")
        >>> rules = NoTempFiles()
        >>> rules.matches("Defs/scratch.tmp")
        True
        >>> rules.matches("Defs", is_dir=True)
        False
    """

    @abstractmethod
    def matches(self, path: PathType, is_dir: bool = False) -> bool:
        """
        Determine whether a path is ignored.

        Args:
            path: Path relative to the root the rules apply to.
            is_dir: Whether the path names a directory.

        Returns:
            bool: True if the path is ignored, False if it should be published.
        """
        pass

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load and append rules from one or more files.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Append a single rule.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
