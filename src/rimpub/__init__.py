"""Publish RimWorld mod development folders into the game's local mods directory.

This package provides the gitignore-style rule engine, the publish pipeline that
mirrors a filtered source tree into a target directory, and the ``rimpub``
command-line front-end built on top of them.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("rimpub")
except PackageNotFoundError:
    __version__ = "unknown"
