"""Command-line argument parsing for rimpub.

This module defines the ``rimpub`` subcommands and their options.
"""

import argparse
from pathlib import Path

from rimpub import __version__
from rimpub.config import CONFIG_KEYS


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser with the publish, config, and generate subcommands. Each
        subcommand sets ``args.command`` to its canonical name.
    """
    description = """
    rimpub: publish a RimWorld mod development folder into the game's local Mods folder.

    The current folder (or SOURCE) is mirrored into <mods dir>/<mod name>, leaving out
    .git, .gitignore, rimpub's own files, and everything matched by the .rimpub-ignore
    file, which uses .gitignore syntax. An optional build hook runs afterwards.
    """

    epilog = """
    Examples:
      # Remember where the game's Mods folder is
      rimpub config set path_mods "C:/Program Files (x86)/Steam/steamapps/common/RimWorld/Mods"

      # Create .rimpub-ignore and .rimpub.toml templates in the current folder
      rimpub generate

      # Publish the current folder
      rimpub publish

      # Publish somewhere else, without the confirmation prompt, then build
      rimpub publish --target-dir ~/test-mods -y --build-hook "dotnet build Source/MyMod.csproj -o"

      # Add extra ignore patterns for this run only
      rimpub publish -i "Source/" -i "*.pdb"
    """

    parser = argparse.ArgumentParser(
        prog="rimpub",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"rimpub {__version__}", help="Show the version and exit"
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug output.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors.")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    publish = subparsers.add_parser(
        "publish",
        aliases=["pub", "p"],
        help="Publish the mod folder to the configured mods directory.",
        description="Mirror the mod folder into <mods dir>/<mod name>, applying ignore rules.",
    )
    publish.set_defaults(command="publish")
    publish.add_argument(
        "source",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Mod folder to publish (default: current directory).",
    )
    publish.add_argument(
        "--target-dir",
        type=Path,
        metavar="DIR",
        help="Mods directory to publish into instead of the configured path_mods.",
    )
    publish.add_argument(
        "--ignore-file",
        type=Path,
        metavar="FILE",
        help="Ignore file to use instead of SOURCE/.rimpub-ignore.",
    )
    publish.add_argument(
        "-i",
        "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help=(
            "Additional gitignore-style pattern, applied after the ignore file. Can be specified "
            "multiple times; patterns are processed in the order they appear."
        ),
    )
    publish.add_argument(
        "--gitignore",
        action="store_true",
        help=(
            "Also apply SOURCE/.gitignore and SOURCE/.git/info/exclude, ahead of the ignore file. "
            "Off by default, so gitignored build output such as Assemblies/ is still published."
        ),
    )
    publish.add_argument(
        "--build-hook",
        metavar="CMD",
        help="Command to run after copying; the published directory is appended as its last argument.",
    )
    publish.add_argument(
        "--no-build",
        action="store_true",
        help="Don't run the build hook configured in .rimpub.toml.",
    )
    publish.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Clear an existing target directory without asking.",
    )
    publish.add_argument(
        "--keep-existing",
        action="store_true",
        help="Copy over an existing target directory instead of clearing it first.",
    )
    publish.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help="Descend into symlinked directories. By default they are skipped.",
    )

    config = subparsers.add_parser(
        "config",
        aliases=["cfg", "c"],
        help="Show or change the global settings.",
    )
    config.set_defaults(command="config")
    config_sub = config.add_subparsers(dest="config_command", metavar="ACTION")
    config_sub.required = True
    config_get = config_sub.add_parser("get", help="Print a setting, or all settings when KEY is omitted.")
    config_get.add_argument("key", nargs="?", choices=CONFIG_KEYS, help="Setting to print.")
    config_set = config_sub.add_parser("set", help="Change a setting.")
    config_set.add_argument("key", choices=CONFIG_KEYS, help="Setting to change.")
    config_set.add_argument("value", help="New value.")
    config_sub.add_parser("check", help="Check that the settings are usable for publishing.")

    generate = subparsers.add_parser(
        "generate",
        aliases=["gen", "g"],
        help="Create template files in the current folder.",
        description="Create .rimpub-ignore and/or .rimpub.toml. Without a FILE, both are created.",
    )
    generate.set_defaults(command="generate")
    generate.add_argument(
        "file",
        nargs="?",
        choices=["ignore-file", "config-file"],
        help="Which template to create (default: both).",
    )
    generate.add_argument(
        "-d",
        "--directory",
        type=Path,
        default=Path("."),
        help="Folder to create the files in (default: current directory).",
    )
    generate.add_argument("-f", "--force", action="store_true", help="Overwrite existing files.")

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.command == "publish":
        if args.build_hook is not None and args.no_build:
            raise ValueError("--build-hook and --no-build cannot be used together")
        if args.build_hook is not None and not args.build_hook.strip():
            raise ValueError("--build-hook requires a non-empty command")
