from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class EntryKind(str, Enum):
    """Kind of filesystem entry discovered while walking a source tree.

    Attributes:
        FILE: Regular file (or a symlink resolved as a file)
        DIRECTORY: Directory
        SYMLINK: Symbolic link that is not followed
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


class PlanAction(str, Enum):
    """What the publish pipeline does with a discovered entry."""

    COPY = "copy"
    SKIP = "skip"
