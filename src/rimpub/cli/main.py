"""Command-line interface for rimpub.

Exit Codes:
    0: Successful completion (including a publish cancelled at the prompt)
    1: Runtime error, or a publish that reported per-entry failures
    2: Command-line syntax error
    3: Files were published but the build hook exited non-zero
    130: Interrupted by SIGINT (Ctrl+C)

Example:
    # Publish the current folder to the configured mods directory
    $ rimpub publish

    # Display version information
    $ rimpub --version
"""

import logging
import sys
from typing import Optional, Sequence

from rimpub.cli.argparser import create_parser, validate_args
from rimpub.cli.commands import EXIT_FAILURE, run_config, run_generate, run_publish
from rimpub.cli.log_format import setup_logging
from rimpub.config import load_config
from rimpub.exceptions import RimpubError

logger = logging.getLogger(__name__)

EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, dispatch to the subcommand, and return the exit code.

    The global configuration is loaded once here and handed to the subcommand.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    setup_logging(level)

    try:
        validate_args(args)
    except ValueError as e:
        parser.print_usage(sys.stderr)
        logger.error("%s", e)
        return EXIT_USAGE

    try:
        if args.command == "generate":
            return run_generate(args)
        config = load_config()
        if args.command == "config":
            return run_config(args, config)
        return run_publish(args, config)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return EXIT_INTERRUPTED
    except (RimpubError, FileExistsError, FileNotFoundError) as e:
        logger.error("%s", e)
        return EXIT_FAILURE
    except OSError as e:
        logger.error("Unexpected error during exec: %s", e)
        return EXIT_FAILURE


def main() -> None:
    """Main entry point for the rimpub command-line interface."""
    sys.exit(run())


if __name__ == "__main__":
    main()
