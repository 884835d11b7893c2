"""Handlers for the rimpub subcommands.

Each handler takes the parsed arguments plus whatever state it needs passed in
explicitly, and returns the process exit code.
"""

import argparse
import logging
import shutil
from pathlib import Path
from typing import Callable, Optional

from rimpub.config import AppConfig, ProjectConfig, check_config, save_config
from rimpub.exceptions import ConfigError, TargetUnwritableError
from rimpub.ignore_rules.rule_set import IGNORE_FILE_NAME, PROJECT_CONFIG_FILE_NAME, RuleSet, git_ignore_files
from rimpub.publish import BuildHook, publish
from rimpub.scaffold import generate_ignore_file, generate_project_config

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BUILD_FAILED = 3


def confirm_deletion(target_dir: Path, ask: Optional[Callable[[str], str]] = None) -> bool:
    """Ask whether an existing target directory may be cleared."""
    ask = ask or input
    try:
        answer = ask(f"Target directory '{target_dir}' already exists. Do you want to delete it and continue? (y/N): ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _resolve_target(args: argparse.Namespace, config: AppConfig, source: Path, name: str) -> Path:
    target_base = args.target_dir if args.target_dir is not None else config.path_mods
    if target_base is None:
        raise ConfigError(
            "Cannot determine target directory from config or args; "
            "run 'rimpub config set path_mods <dir>' or pass --target-dir"
        )
    target = (Path(target_base).expanduser() / name).resolve()
    if target.is_relative_to(source) or source.is_relative_to(target):
        raise ConfigError(f"Target directory {target} overlaps the source directory {source}")
    return target


def _clear_target(target: Path) -> None:
    logger.info("Clearing existing target directory: %s", target)
    try:
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            target.unlink()
    except OSError as e:
        raise TargetUnwritableError(target, f"failed to remove existing target: {e.strerror or e}") from e


def run_publish(
    args: argparse.Namespace,
    config: AppConfig,
    ask: Optional[Callable[[str], str]] = None,
) -> int:
    """Publish the source folder into ``<target base>/<mod name>``."""
    source = args.source.expanduser().resolve()
    logger.info("Working directory: %s", source)

    project, _ = ProjectConfig.load(source)
    name = project.resolve_name(source)
    logger.info("Working project: %s", name)

    target = _resolve_target(args, config, source, name)
    logger.info("Target directory: %s", target)

    if args.ignore_file is not None and not args.ignore_file.is_file():
        raise ConfigError(f"Ignore file not found: {args.ignore_file}", path=args.ignore_file)
    ignore_file = args.ignore_file if args.ignore_file is not None else source / IGNORE_FILE_NAME
    git_files = git_ignore_files(source) if args.gitignore else []
    rules = RuleSet.for_publish(ignore_file, args.ignore, git_files)

    build_hook: Optional[BuildHook] = None
    if not args.no_build:
        hook_value = args.build_hook if args.build_hook is not None else project.build_hook
        if hook_value:
            build_hook = BuildHook.from_value(hook_value, cwd=source)

    if target.exists() and not args.keep_existing:
        if not (args.yes or config.no_ask) and not confirm_deletion(target, ask):
            logger.info("Operation cancelled by user")
            return EXIT_OK
        _clear_target(target)

    report = publish(source, target, rules, build_hook=build_hook, follow_symlinks=args.follow_symlinks)

    for failure in report.failures:
        logger.error("%s", failure)
    if not report.copy_succeeded:
        logger.warning("Errors encountered during processing")
        return EXIT_FAILURE
    if not report.build_succeeded:
        return EXIT_BUILD_FAILED
    logger.info("Successfully published %s", name)
    return EXIT_OK


def run_config(
    args: argparse.Namespace,
    config: AppConfig,
    config_dir: Optional[Path] = None,
) -> int:
    """Print, change, or check the global settings."""
    if args.config_command == "get":
        keys = [args.key] if args.key else list(config.to_dict())
        for key in keys:
            value = config.get(key)
            if value is None:
                logger.warning("'%s' not set", key)
            else:
                print(f"{key} = {value}")
        return EXIT_OK

    if args.config_command == "set":
        updated = config.with_value(args.key, args.value)
        path = save_config(updated, config_dir)
        logger.info("Set '%s' to %s", args.key, updated.get(args.key))
        logger.debug("Saved config to %s", path)
        return EXIT_OK

    problems = check_config(config)
    for problem in problems:
        logger.warning("%s", problem)
    if problems:
        logger.warning("Config check failed")
        return EXIT_FAILURE
    logger.info("Config ready")
    return EXIT_OK


def run_generate(args: argparse.Namespace) -> int:
    """Create the ignore file and/or project config templates.

    With an explicit FILE an existing file is an error; when generating both, existing
    files are reported and left alone.
    """
    directory = args.directory.expanduser()
    generators = {
        "ignore-file": (generate_ignore_file, directory / IGNORE_FILE_NAME),
        "config-file": (generate_project_config, directory / PROJECT_CONFIG_FILE_NAME),
    }

    if args.file is not None:
        generator, path = generators[args.file]
        generator(path, overwrite=args.force)
        return EXIT_OK

    logger.info("No file specified, generating both config and ignore files")
    for generator, path in generators.values():
        try:
            generator(path, overwrite=args.force)
        except FileExistsError:
            logger.warning("File already exists at %s", path)
    return EXIT_OK
