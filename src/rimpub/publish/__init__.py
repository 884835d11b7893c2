"""Publish pipeline: plan a filtered copy of a source tree, execute it, run the build hook."""

from .build_hook import BuildHook
from .copy_plan import CopyPlan
from .pipeline import publish
from .plan_node import PlanNode
from .report import PublishReport

__all__ = [
    "BuildHook",
    "CopyPlan",
    "PlanNode",
    "PublishReport",
    "publish",
]
