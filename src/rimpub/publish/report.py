"""Outcome of a single publish run."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from rimpub.exceptions import PublishError


@dataclass
class PublishReport:
    """What a publish run copied, skipped, and failed on.

    Partial success is a valid outcome: per-entry failures are collected here instead
    of aborting the run.

    Attributes:
        source_dir: Root of the published tree.
        target_dir: Directory the tree was mirrored into.
        copied_files: Relative paths of files written to the target.
        created_dirs: Relative paths of directories ensured under the target.
        skipped: Relative paths left out (ignored entries and unfollowed symlinks).
        failures: Per-entry errors, each carrying the offending path.
        build_exit_code: Exit status of the build hook, or None if no hook ran.
    """

    source_dir: Path
    target_dir: Path
    copied_files: List[str] = field(default_factory=list)
    created_dirs: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failures: List[PublishError] = field(default_factory=list)
    build_exit_code: Optional[int] = None

    @property
    def copy_succeeded(self) -> bool:
        return not self.failures

    @property
    def build_succeeded(self) -> bool:
        return self.build_exit_code in (None, 0)

    @property
    def ok(self) -> bool:
        return self.copy_succeeded and self.build_succeeded

    def summary(self) -> str:
        """Format the counts into a human-readable one-line summary.

        Example:
            >>> report = PublishReport(Path("src"), Path("dst"), copied_files=["a.txt"], skipped=[".git"])
            >>> report.summary()
            'Files copied: 1, Directories: 0, Skipped: 1, Failures: 0'
        """
        result = [
            f"Files copied: {len(self.copied_files)}",
            f"Directories: {len(self.created_dirs)}",
            f"Skipped: {len(self.skipped)}",
            f"Failures: {len(self.failures)}",
        ]
        if self.build_exit_code is not None:
            result.append(f"Build exit code: {self.build_exit_code}")
        return ", ".join(result)
