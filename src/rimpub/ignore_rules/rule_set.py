"""Ordered, last-match-wins collection of gitignore-style rules."""

import logging
from os import PathLike
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from rimpub.types import PathType

from .base_rules import BaseIgnoreRules
from .ignore_rule import IgnoreRule

logger = logging.getLogger(__name__)

IGNORE_FILE_NAME = ".rimpub-ignore"
GITIGNORE_FILE_NAME = ".gitignore"
GIT_EXCLUDE_PATH = Path(".git", "info", "exclude")
PROJECT_CONFIG_FILE_NAME = ".rimpub.toml"

# Always excluded from a publish, ahead of any user rule
DEFAULT_PATTERNS: Tuple[str, ...] = (
    ".git",
    GITIGNORE_FILE_NAME,
    IGNORE_FILE_NAME,
    PROJECT_CONFIG_FILE_NAME,
)


def normalize_path(path: PathType, is_dir: bool = False) -> str:
    """Convert a path into the canonical form the rules are matched against.

    Separators become ``/``, leading ``./`` and ``/`` are dropped, and directories get
    a trailing ``/``.

    Example:
        >>> normalize_path("Source\\\\Mod.cs")
        'Source/Mod.cs'
        >>> normalize_path("./About", is_dir=True)
        'About/'
    """
    text = str(path).replace("\\", "/")
    while text.startswith("./"):
        text = text[2:]
    text = text.strip("/")
    if text == ".":
        text = ""
    if is_dir and text:
        text += "/"
    return text


class RuleSet(BaseIgnoreRules):
    """Compiled gitignore-style rules evaluated in declaration order.

    For any path, the last rule whose glob matches decides: a plain rule ignores the
    path, a ``!`` rule un-ignores it, and a path no rule matches is kept. Ignoring a
    directory ignores everything below it, so a negation can never bring back a path
    whose parent directory is ignored. This is the same precedence git applies.

    Attributes:
        rules (List[IgnoreRule]): Compiled rules in declaration order.

    Example:
        >>> rules = RuleSet.compile(["*.log", "!keep.log", "build/"])
        >>> rules.matches("debug.log")
        True
        >>> rules.matches("keep.log")
        False
        >>> rules.matches("build", is_dir=True)
        True
        >>> rules.matches("build/obj/x.o")
        True

    Note:
        Matching is case-sensitive on every platform.
    """

    def __init__(self, rules: Optional[Sequence[IgnoreRule]] = None) -> None:
        self.rules: List[IgnoreRule] = list(rules) if rules else []

    @classmethod
    def compile(cls, lines: Iterable[str]) -> "RuleSet":
        """Compile raw pattern lines into a rule set.

        Args:
            lines: Pattern lines in declaration order. Blank lines and ``#`` comments
                are skipped.

        Returns:
            A new RuleSet.

        Raises:
            InvalidPatternError: If any line cannot be parsed.
        """
        rule_set = cls()
        rule_set.extend(lines)
        return rule_set

    @classmethod
    def from_file(cls, rules_file: PathType) -> "RuleSet":
        """Compile the rules contained in a single ignore file."""
        rule_set = cls()
        rule_set.load_rules(rules_file)
        return rule_set

    @classmethod
    def for_publish(
        cls,
        ignore_file: Optional[PathType] = None,
        extra_patterns: Sequence[str] = (),
        git_files: Sequence[PathType] = (),
    ) -> "RuleSet":
        """Build the rule set used to publish a mod folder.

        The built-in defaults come first, then any git ignore files, then the ignore
        file's patterns in file order, then any extra patterns. Missing files are not
        an error.

        Args:
            ignore_file: Path to the project's ignore file, if any.
            extra_patterns: Additional patterns, e.g. from the command line.
            git_files: Git ignore files to honour, lowest precedence first (see
                git_ignore_files).

        Raises:
            InvalidPatternError: If any pattern cannot be parsed.
        """
        rule_set = cls.compile(DEFAULT_PATTERNS)
        for git_file in git_files:
            if Path(git_file).is_file():
                rule_set.load_rules(git_file)
            else:
                logger.debug("No git ignore file at %s", git_file)
        if ignore_file is not None:
            if Path(ignore_file).is_file():
                rule_set.load_rules(ignore_file)
            else:
                logger.debug("No ignore file at %s, using default rules", ignore_file)
        rule_set.extend(extra_patterns)
        return rule_set

    def extend(self, lines: Iterable[str]) -> None:
        """Append pattern lines, keeping declaration order.

        Errors from these patterns carry no line number; use load_rules for files.
        """
        for line in lines:
            self._append(line, None)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns from one or more UTF-8 ignore files.

        Raises:
            FileNotFoundError: If any rules file does not exist.
            InvalidPatternError: If any pattern cannot be parsed.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()

            before = len(self.rules)
            for line_number, line in enumerate(lines, start=1):
                self._append(line, line_number)
            logger.debug("Loaded %d rule(s) from %s", len(self.rules) - before, path)

    def add_rule(self, rule: str) -> None:
        """Append a single pattern.

        Example:
            >>> rules = RuleSet()
            >>> rules.add_rule("*.pdb")
            >>> rules.matches("Assemblies/Mod.pdb")
            True
        """
        self.extend([rule])

    def matches(self, path: PathType, is_dir: bool = False) -> bool:
        """Check whether a path relative to the source root is ignored.

        Every ancestor directory is evaluated first; if any of them is ignored the
        path is ignored as well. Otherwise the last matching rule decides.

        Args:
            path: Relative path, with either ``/`` or ``\\`` separators.
            is_dir: Whether the path names a directory.

        Returns:
            True if the path is ignored, False otherwise (including when no rule matches).
        """
        normalized = normalize_path(path)
        if not normalized:
            return False

        parts = normalized.split("/")
        for depth in range(1, len(parts)):
            if self._last_match_ignores("/".join(parts[:depth]) + "/"):
                return True

        return self._last_match_ignores(normalized + "/" if is_dir else normalized)

    def has_rules(self) -> bool:
        return bool(self.rules)

    @property
    def patterns(self) -> List[str]:
        return [rule.pattern for rule in self.rules]

    def _append(self, line: str, line_number: Optional[int]) -> None:
        rule = IgnoreRule.parse(line, order=len(self.rules), line_number=line_number)
        if rule is not None:
            self.rules.append(rule)

    def _last_match_ignores(self, normalized: str) -> bool:
        for rule in reversed(self.rules):
            if rule.match(normalized):
                return not rule.negated
        return False

    def __iter__(self) -> Iterator[IgnoreRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


def compile_rules(lines: Iterable[str]) -> RuleSet:
    """Compile pattern lines into a RuleSet. Shorthand for ``RuleSet.compile``."""
    return RuleSet.compile(lines)


def git_ignore_files(source_dir: PathType) -> List[Path]:
    """Return the git ignore files of a source folder, lowest precedence first.

    Only the root ``.gitignore`` is read; ``.git/info/exclude`` comes before it, as in git.
    """
    root = Path(source_dir)
    return [root / GIT_EXCLUDE_PATH, root / GITIGNORE_FILE_NAME]
