from typing import Optional

from rimpub.types import PathType


class RimpubError(Exception):
    """Base class for all errors raised by rimpub.

    Attributes:
        path (Optional[str]): The offending filesystem path, when one applies.

    Example:
        >>> error = RimpubError("something broke", path="/tmp/mod")
        >>> error.path
        '/tmp/mod'
    """

    def __init__(self, message: str, path: Optional[PathType] = None) -> None:
        self.path = str(path) if path is not None else None
        super().__init__(message)


class InvalidPatternError(RimpubError, ValueError):
    """
    Exception raised when an ignore rule cannot be parsed.

    Blank lines and comments are never errors; this is reserved for patterns that are
    structurally unparsable, such as an empty negation.

    Attributes:
        pattern (str): The offending pattern text.
        line_number (Optional[int]): 1-based line number within the ignore source, if known.

    Example:
        >>> error = InvalidPatternError("!", line_number=3)
        >>> str(error)
        "Invalid ignore pattern '!' on line 3"
    """

    def __init__(self, pattern: str, line_number: Optional[int] = None, reason: Optional[str] = None) -> None:
        self.pattern = pattern
        self.line_number = line_number
        message = f"Invalid ignore pattern {pattern!r}"
        if line_number is not None:
            message += f" on line {line_number}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class PublishError(RimpubError):
    """Base class for failures raised or collected by the publish pipeline."""

    pass


class SourceUnreadableError(PublishError):
    """
    Exception raised when a source entry cannot be read.

    Fatal when it concerns the source root; collected into the publish report when it
    concerns a single entry.

    Example:
        >>> error = SourceUnreadableError("/mods/src/missing.xml", "No such file")
        >>> str(error)
        'Cannot read source /mods/src/missing.xml: No such file'
    """

    def __init__(self, path: PathType, reason: str) -> None:
        super().__init__(f"Cannot read source {path}: {reason}", path=path)


class TargetUnwritableError(PublishError):
    """
    Exception raised when a destination entry cannot be created or written.

    Example:
        >>> error = TargetUnwritableError("/game/Mods/MyMod", "Permission denied")
        >>> str(error)
        'Cannot write target /game/Mods/MyMod: Permission denied'
    """

    def __init__(self, path: PathType, reason: str) -> None:
        super().__init__(f"Cannot write target {path}: {reason}", path=path)


class BuildHookError(PublishError):
    """Exception raised when the build hook process cannot be launched."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        super().__init__(f"Cannot run build hook {command!r}: {reason}")


class ConfigError(RimpubError):
    """Exception raised for unreadable, malformed, or invalid configuration."""

    pass
