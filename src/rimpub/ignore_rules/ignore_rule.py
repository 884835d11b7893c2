"""A single parsed gitignore-style rule."""

from dataclasses import dataclass, field
from typing import Optional, Pattern

from pathspec.patterns import GitWildMatchPattern  # type: ignore
from pathspec.patterns.gitwildmatch import GitWildMatchPatternError  # type: ignore

from rimpub.exceptions import InvalidPatternError

# Group pathspec uses for the "/" that separates a matched directory from its contents
DIR_MARK_GROUP = "ps_d"


@dataclass(frozen=True)
class IgnoreRule:
    """An immutable, compiled ignore rule.

    The glob itself is compiled with pathspec's ``GitWildMatchPattern`` so that the
    matching semantics are exactly git's. The flags below are derived from the raw
    line and describe the rule without having to re-parse it.

    Attributes:
        pattern (str): The rule text as it appeared in the source (whitespace-trimmed).
        negated (bool): True for ``!pattern`` rules that un-ignore a path.
        directory_only (bool): True when the pattern ends with ``/`` and only matches directories.
        rooted (bool): True when the pattern contains a non-trailing ``/`` and is
            therefore anchored to the ignore file's directory.
        order (int): Declaration index; later rules override earlier ones.

    Example:
        >>> rule = IgnoreRule.parse("!build/", order=0)
        >>> rule.negated, rule.directory_only, rule.rooted
        (True, True, False)
        >>> IgnoreRule.parse("# comment", order=1) is None
        True
    """

    pattern: str
    negated: bool
    directory_only: bool
    rooted: bool
    order: int
    regex: Pattern[str] = field(compare=False, repr=False)

    @classmethod
    def parse(cls, line: str, order: int, line_number: Optional[int] = None) -> Optional["IgnoreRule"]:
        """Parse one line of an ignore file.

        Args:
            line: Raw line, with or without its trailing newline.
            order: Declaration index assigned to the resulting rule.
            line_number: 1-based line number used in error messages.

        Returns:
            The compiled rule, or None for blank lines, comments, and patterns that can
            never match anything (a lone ``/``).

        Raises:
            InvalidPatternError: If the line is a negation without a pattern, or if the
                gitignore compiler rejects it.
        """
        text = line.rstrip("\r\n")
        text = text.lstrip() if text.endswith("\\ ") else text.strip()
        if not text or text.startswith("#"):
            return None

        negated = text.startswith("!")
        body = text[1:] if negated else text
        if not body.strip("/"):
            if negated:
                raise InvalidPatternError(text, line_number, "negation without a pattern")
            return None

        try:
            compiled = GitWildMatchPattern(text)
        except GitWildMatchPatternError as e:
            raise InvalidPatternError(text, line_number, str(e)) from e

        if compiled.regex is None:
            return None

        return cls(
            pattern=text,
            negated=negated,
            directory_only=body.endswith("/"),
            rooted="/" in body.rstrip("/"),
            order=order,
            regex=compiled.regex,
        )

    def match(self, normalized_path: str) -> bool:
        """Test a normalized path against this rule's glob.

        Args:
            normalized_path: Path relative to the ignore root, using ``/`` separators,
                with a trailing ``/`` when it names a directory.

        Returns:
            True if the glob matches the path itself, regardless of whether the rule is a
            negation. A path that only matches because it lies below a matched
            directory does not count; ancestors are checked separately by RuleSet.
        """
        match = self.regex.match(normalized_path)
        if match is None:
            return False
        if DIR_MARK_GROUP not in self.regex.groupindex:
            return True
        dir_end = match.end(DIR_MARK_GROUP)
        return dir_end == -1 or dir_end == len(normalized_path)
