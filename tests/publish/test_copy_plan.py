"""Unit tests for the CopyPlan class."""

import os
import sys

import pytest

from rimpub.exceptions import SourceUnreadableError
from rimpub.ignore_rules import RuleSet
from rimpub.publish import CopyPlan, PlanNode
from rimpub.types import EntryKind, PlanAction


@pytest.fixture
def temp_directory(tmp_path):
    (tmp_path / "About").mkdir()
    (tmp_path / "About" / "About.xml").touch()
    (tmp_path / "Source").mkdir()
    (tmp_path / "Source" / "Mod.cs").touch()
    (tmp_path / "Source" / "obj").mkdir()
    (tmp_path / "Source" / "obj" / "Mod.dll").touch()
    (tmp_path / "readme.md").touch()
    return tmp_path


def plan_paths(plan):
    return [(node.relative_path, node.action) for node in plan.entries()]


def test_plan_without_rules_copies_everything(temp_directory):
    plan = CopyPlan(temp_directory, RuleSet())
    assert plan_paths(plan) == [
        ("About", PlanAction.COPY),
        ("About/About.xml", PlanAction.COPY),
        ("Source", PlanAction.COPY),
        ("Source/Mod.cs", PlanAction.COPY),
        ("Source/obj", PlanAction.COPY),
        ("Source/obj/Mod.dll", PlanAction.COPY),
        ("readme.md", PlanAction.COPY),
    ]
    assert plan.failures == []


def test_ignored_directory_is_pruned(temp_directory):
    plan = CopyPlan(temp_directory, RuleSet.compile(["obj/"]))
    entries = {node.relative_path: node for node in plan.entries()}

    assert entries["Source/obj"].action == PlanAction.SKIP
    assert entries["Source/obj"].reason == "ignored"
    assert entries["Source/obj"].children == ()
    assert "Source/obj/Mod.dll" not in entries


def test_ignored_file_is_skipped(temp_directory):
    plan = CopyPlan(temp_directory, RuleSet.compile(["*.md"]))
    node = next(node for node in plan.entries() if node.relative_path == "readme.md")
    assert node.skipped
    assert node.kind == EntryKind.FILE


def test_root_node(temp_directory):
    root = CopyPlan(temp_directory, RuleSet()).get_root()
    assert isinstance(root, PlanNode)
    assert root.is_dir
    assert root.name == temp_directory.name
    assert [child.name for child in root.children] == ["About", "Source", "readme.md"]


def test_plan_is_built_once(temp_directory):
    plan = CopyPlan(temp_directory, RuleSet())
    root = plan.get_root()
    (temp_directory / "late.txt").touch()
    assert plan.get_root() is root
    assert "late.txt" not in [node.relative_path for node in plan.entries()]


def test_missing_root(tmp_path):
    with pytest.raises(SourceUnreadableError):
        CopyPlan(tmp_path / "missing", RuleSet()).get_root()


@pytest.mark.skipif(sys.platform == "win32" or os.geteuid() == 0, reason="Needs POSIX permissions as non-root")
def test_unlistable_directory_is_collected(temp_directory):
    locked = temp_directory / "Locked"
    locked.mkdir()
    (locked / "secret.xml").touch()
    locked.chmod(0)
    try:
        plan = CopyPlan(temp_directory, RuleSet())
        paths = [node.relative_path for node in plan.entries()]
        assert "Locked" in paths
        assert "Locked/secret.xml" not in paths
        assert len(plan.failures) == 1
        assert plan.failures[0].path == str(locked)
    finally:
        locked.chmod(0o755)
