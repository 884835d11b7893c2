"""Gitignore-style ignore rules for filtering published files and directories."""

from .base_rules import BaseIgnoreRules
from .ignore_rule import IgnoreRule
from .rule_set import (
    DEFAULT_PATTERNS,
    IGNORE_FILE_NAME,
    PROJECT_CONFIG_FILE_NAME,
    RuleSet,
    compile_rules,
    git_ignore_files,
)

__all__ = [
    "BaseIgnoreRules",
    "DEFAULT_PATTERNS",
    "IGNORE_FILE_NAME",
    "IgnoreRule",
    "PROJECT_CONFIG_FILE_NAME",
    "RuleSet",
    "compile_rules",
    "git_ignore_files",
]
