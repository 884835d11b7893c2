"""Device/inode identity used to detect symlink loops while walking a source tree."""

import os
from typing import NamedTuple, Optional


class FileIdentifier(NamedTuple):
    """Uniquely identifies a directory by device ID and inode number.

    Note:
        On Windows, st_ino is provided by Python's os.stat implementation and is
        stable enough for loop detection.
    """

    device_id: int
    inode_number: int

    @classmethod
    def for_path(cls, path: "os.PathLike[str]") -> Optional["FileIdentifier"]:
        """Stat a path (following symlinks) and return its identity, or None if it can't be read."""
        try:
            stat_info = os.stat(path)
        except OSError:
            return None
        return cls(stat_info.st_dev, stat_info.st_ino)
