"""Templates written by ``rimpub generate``."""

import logging
from pathlib import Path

from rimpub.ignore_rules.rule_set import DEFAULT_PATTERNS
from rimpub.types import PathType

logger = logging.getLogger(__name__)

IGNORE_FILE_HEADER = """\
# Files and directories to leave out when publishing this mod.
# Uses .gitignore syntax: one pattern per line, '!' re-includes, a trailing '/' matches directories only.
#
# These are always excluded and do not need to be listed:
"""

IGNORE_FILE_EXAMPLES = """\
#
# Examples:
# Source/
# *.pdb
# !Assemblies/
"""

PROJECT_CONFIG_TEMPLATE = """\
# rimpub project settings
# Folder name under the mods directory; defaults to this directory's name
name = ""
# Command run after publishing, with the published directory appended as the last argument
# build_hook = ["dotnet", "build", "Source/MyMod.csproj", "-o"]
"""


def ignore_file_template() -> str:
    defaults = "".join(f"# {pattern}\n" for pattern in DEFAULT_PATTERNS)
    return IGNORE_FILE_HEADER + defaults + IGNORE_FILE_EXAMPLES


def _write_new(path: Path, content: str, overwrite: bool) -> Path:
    if path.exists() and not overwrite:
        raise FileExistsError(f"File already exists: {path}")
    path.write_text(content, encoding="utf-8")
    logger.info("Generated %s", path)
    return path


def generate_ignore_file(path: PathType, overwrite: bool = False) -> Path:
    """Write the ignore-file template.

    Args:
        path: Destination file, usually ``<mod>/.rimpub-ignore``.
        overwrite: Replace an existing file instead of refusing.

    Returns:
        The path written.

    Raises:
        FileExistsError: If the file exists and overwrite is False. The existing file
            is left untouched.
    """
    return _write_new(Path(path), ignore_file_template(), overwrite)


def generate_project_config(path: PathType, overwrite: bool = False) -> Path:
    """Write the ``.rimpub.toml`` template. Refuses to overwrite like generate_ignore_file."""
    return _write_new(Path(path), PROJECT_CONFIG_TEMPLATE, overwrite)
