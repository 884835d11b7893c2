"""Node representation for entries of a copy plan."""

from typing import Any, Optional

from anytree import Node

from rimpub.types import EntryKind, PlanAction


class PlanNode(Node):  # type: ignore
    """One entry discovered while walking the source tree.

    Extends anytree.Node with the entry's path relative to the source root, its kind,
    and whether the pipeline copies or skips it. A skipped directory never has children
    because its subtree is pruned during the walk.

    Attributes:
        name (str): Base name of the entry.
        relative_path (str): Path relative to the source root, ``/``-separated.
        kind (EntryKind): File, directory, or unfollowed symlink.
        action (PlanAction): COPY or SKIP.
        reason (Optional[str]): Why the entry is skipped ("ignored", "symlink", "loop").

    Example:
        >>> root = PlanNode("MyMod", kind=EntryKind.DIRECTORY)
        >>> about = PlanNode("About", parent=root, relative_path="About", kind=EntryKind.DIRECTORY)
        >>> about.is_dir, about.action
        (True, <PlanAction.COPY: 'copy'>)
    """

    def __init__(
        self,
        name: str,
        parent: Optional["PlanNode"] = None,
        relative_path: str = "",
        kind: EntryKind = EntryKind.FILE,
        action: PlanAction = PlanAction.COPY,
        reason: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.relative_path = relative_path
        self.kind = kind
        self.action = action
        self.reason = reason

    @property
    def is_dir(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    @property
    def skipped(self) -> bool:
        return self.action == PlanAction.SKIP
