"""Mirror a filtered source tree into a target directory."""

import logging
import os
import shutil
import stat
from pathlib import Path
from typing import Optional

from rimpub.exceptions import BuildHookError, SourceUnreadableError, TargetUnwritableError
from rimpub.ignore_rules.base_rules import BaseIgnoreRules
from rimpub.publish.build_hook import BuildHook
from rimpub.publish.copy_plan import CopyPlan
from rimpub.publish.report import PublishReport
from rimpub.types import PathType

logger = logging.getLogger(__name__)


def publish(
    source_dir: PathType,
    target_dir: PathType,
    rules: BaseIgnoreRules,
    build_hook: Optional[BuildHook] = None,
    follow_symlinks: bool = False,
) -> PublishReport:
    """Copy every non-ignored entry of source_dir into target_dir.

    Directories are created as needed and files overwrite whatever is at the
    destination; nothing already in the target is deleted. Per-entry failures are
    collected into the report and never stop the walk. If a build hook is given it runs
    exactly once after the copy phase, even when some entries failed.

    Args:
        source_dir: Root of the tree to publish. Never modified.
        target_dir: Directory to mirror into. Created if missing.
        rules: Rules deciding which entries are left out.
        build_hook: Optional command run with target_dir as its last argument.
        follow_symlinks: Whether to descend into symlinked directories.

    Returns:
        A PublishReport describing the run.

    Raises:
        SourceUnreadableError: If the source root is missing or not a directory.
        TargetUnwritableError: If the target root cannot be created.
    """
    source = Path(source_dir)
    target = Path(target_dir)

    plan = CopyPlan(source, rules, follow_symlinks=follow_symlinks)
    plan.get_root()
    _ensure_target_root(target)

    report = PublishReport(source_dir=source, target_dir=target)
    report.failures.extend(plan.failures)

    for node in plan.entries():
        if node.skipped:
            report.skipped.append(node.relative_path)
            continue

        source_path = source / node.relative_path
        target_path = target / node.relative_path
        try:
            if node.is_dir:
                _ensure_directory(target_path)
                report.created_dirs.append(node.relative_path)
                logger.debug("Created directory: %s", node.relative_path)
            else:
                _copy_file(source_path, target_path)
                report.copied_files.append(node.relative_path)
                logger.debug("Copied file: %s", node.relative_path)
        except (SourceUnreadableError, TargetUnwritableError) as e:
            logger.warning("Failed to copy %s: %s", node.relative_path, e)
            report.failures.append(e)

    if build_hook is not None:
        try:
            report.build_exit_code = build_hook.run(target)
        except BuildHookError as e:
            logger.error("%s", e)
            report.failures.append(e)

    if report.failures:
        logger.warning("Publish finished with %d failure(s)", len(report.failures))
    logger.info(report.summary())
    return report


def _ensure_target_root(target: Path) -> None:
    if target.exists() and not target.is_dir():
        raise TargetUnwritableError(target, "exists and is not a directory")
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise TargetUnwritableError(target, e.strerror or str(e)) from e
    if not os.access(target, os.W_OK):
        raise TargetUnwritableError(target, "permission denied")


def _ensure_directory(target_path: Path) -> None:
    try:
        target_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise TargetUnwritableError(target_path, e.strerror or str(e)) from e


def _copy_file(source_path: Path, target_path: Path) -> None:
    """Copy file content and permission bits, overwriting the destination.

    Only regular files are copied; FIFOs, sockets and device files are reported as
    unreadable instead of being opened.
    """
    try:
        mode = os.stat(source_path).st_mode
    except OSError as e:
        raise SourceUnreadableError(source_path, e.strerror or str(e)) from e
    if not stat.S_ISREG(mode):
        raise SourceUnreadableError(source_path, "not a regular file")
    if not os.access(source_path, os.R_OK):
        raise SourceUnreadableError(source_path, "permission denied")

    try:
        # Files published from a read-only source keep that mode; make room to overwrite them
        if target_path.is_file() and not os.access(target_path, os.W_OK):
            os.chmod(target_path, target_path.stat().st_mode | stat.S_IWUSR)
        shutil.copyfile(source_path, target_path)
        shutil.copymode(source_path, target_path)
    except (shutil.SpecialFileError, shutil.SameFileError) as e:
        raise SourceUnreadableError(source_path, str(e)) from e
    except OSError as e:
        raise TargetUnwritableError(target_path, e.strerror or str(e)) from e
