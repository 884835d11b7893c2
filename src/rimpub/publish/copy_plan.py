"""Walk a source tree and tag every entry as copy or skip.

The plan is built depth-first in sorted name order. Each entry is queried against the
rule set exactly once; ignored directories are pruned so nothing below them is ever
listed or queried.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Set

from anytree import PreOrderIter

from rimpub.exceptions import PublishError, SourceUnreadableError
from rimpub.ignore_rules.base_rules import BaseIgnoreRules
from rimpub.publish.file_identifier import FileIdentifier
from rimpub.publish.plan_node import PlanNode
from rimpub.types import EntryKind, PathType, PlanAction

logger = logging.getLogger(__name__)


class CopyPlan:
    """The set of entries a publish run copies or skips.

    Symbolic Link Behavior:
        Symlinks to files are treated as the files they point to; a broken symlink is
        planned as a file and fails when copied. Symlinks to directories are skipped
        unless follow_symlinks is True, in which case they are descended with
        device/inode loop detection.

    Attributes:
        source_dir (Path): Root of the tree being planned.
        rules (BaseIgnoreRules): Rules deciding which entries are skipped.
        follow_symlinks (bool): Whether directory symlinks are descended.
        failures (List[PublishError]): Directories that could not be listed.

    Example:
        >>> from rimpub.ignore_rules import RuleSet
        >>> plan = CopyPlan("MyMod", RuleSet.compile(["build/"]))  # doctest: +SKIP
        >>> [node.relative_path for node in plan.entries() if not node.skipped]  # doctest: +SKIP
        ['About', 'About/About.xml', 'Defs', 'Defs/Things.xml']
    """

    def __init__(self, source_dir: PathType, rules: BaseIgnoreRules, follow_symlinks: bool = False) -> None:
        self.source_dir = Path(source_dir)
        self.rules = rules
        self.follow_symlinks = follow_symlinks
        self.failures: List[PublishError] = []
        self._root: Optional[PlanNode] = None

    def get_root(self) -> PlanNode:
        """Return the root node, building the plan on first access.

        Raises:
            SourceUnreadableError: If the source root is missing, not a directory, or
                cannot be listed.
        """
        if self._root is None:
            self._root = self._build()
        return self._root

    def entries(self) -> Iterator[PlanNode]:
        """Yield every planned entry (root excluded) parents before children."""
        root = self.get_root()
        for node in PreOrderIter(root):
            if node is not root:
                yield node

    def _build(self) -> PlanNode:
        if not self.source_dir.exists():
            raise SourceUnreadableError(self.source_dir, "directory does not exist")
        if not self.source_dir.is_dir():
            raise SourceUnreadableError(self.source_dir, "not a directory")

        self.failures = []
        root = PlanNode(self.source_dir.name or str(self.source_dir), kind=EntryKind.DIRECTORY)
        visited: Set[FileIdentifier] = set()
        root_id = FileIdentifier.for_path(self.source_dir)
        if root_id is not None:
            visited.add(root_id)

        try:
            names = sorted(os.listdir(self.source_dir))
        except OSError as e:
            raise SourceUnreadableError(self.source_dir, e.strerror or str(e)) from e

        for name in names:
            self._plan_entry(self.source_dir / name, name, root, visited)
        return root

    def _plan_entry(self, path: Path, relative_path: str, parent: PlanNode, visited: Set[FileIdentifier]) -> None:
        is_symlink = path.is_symlink()
        try:
            is_dir = path.is_dir()
        except OSError:
            is_dir = False

        kind = EntryKind.DIRECTORY if is_dir else EntryKind.FILE
        if self.rules.matches(relative_path, is_dir=is_dir):
            logger.debug("Ignored: %s", relative_path)
            PlanNode(path.name, parent, relative_path, kind, PlanAction.SKIP, "ignored")
            return

        if not is_dir:
            PlanNode(path.name, parent, relative_path, kind)
            return

        if is_symlink and not self.follow_symlinks:
            logger.debug("Not following directory symlink: %s", relative_path)
            PlanNode(path.name, parent, relative_path, EntryKind.SYMLINK, PlanAction.SKIP, "symlink")
            return

        file_id = FileIdentifier.for_path(path)
        if file_id is not None and file_id in visited:
            logger.warning("Symlink loop detected at %s, skipping", relative_path)
            PlanNode(path.name, parent, relative_path, EntryKind.SYMLINK, PlanAction.SKIP, "loop")
            return

        node = PlanNode(path.name, parent, relative_path, kind)
        try:
            names = sorted(os.listdir(path))
        except OSError as e:
            # The directory itself is still created; only its contents are missing
            failure = SourceUnreadableError(path, e.strerror or str(e))
            logger.warning("%s", failure)
            self.failures.append(failure)
            return

        if file_id is not None:
            visited.add(file_id)
        for name in names:
            self._plan_entry(path / name, f"{relative_path}/{name}", node, visited)
        if file_id is not None:
            visited.discard(file_id)
