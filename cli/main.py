"""CLI entry point."""

import os
import sys
from pathlib import Path
from typing import Optional

from common.logging_config import setup_logging
from cli.commands import EXIT_FAILURE, EXIT_USAGE, handle_upload
from cli.config import Config
from cli.constants import USAGE_TEXT
from cli.parser import ParseError, parse_args
from cli.utils import format_error, wait_for_acknowledgement
from uploader.exceptions import ConfigError


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the uploader CLI. Returns the process exit code."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        cmd = parse_args(argv)
    except ParseError as e:
        print(f"Error: {e}\n")
        print(USAGE_TEXT)
        return EXIT_USAGE

    try:
        config = Config(Path(cmd.config_path) if cmd.config_path else None)
        log_level = 'DEBUG' if cmd.debug else os.getenv('LOG_LEVEL') or config.get_log_level()
        logger = setup_logging('filesharer', log_level=log_level)
        config.validate()
    except ConfigError as e:
        print(format_error(f"Error: Configuration is missing or invalid. {e}"))
        if cmd.pause:
            wait_for_acknowledgement()
        return EXIT_FAILURE

    if cmd.debug:
        logger.info("Debug logging enabled")

    logger.info("Uploader starting...")
    try:
        return handle_upload(cmd, config, sys.stdout)
    except Exception as e:
        logger.error(f"Uploader error: {e}", exc_info=True)
        print(format_error(f"\nAn unexpected error has occurred: {e}"))
        return EXIT_FAILURE
    finally:
        logger.info("Uploader exiting")
        if cmd.pause or config.pause_on_exit():
            wait_for_acknowledgement()


def run() -> None:
    """Console script wrapper that exits with main()'s status."""
    sys.exit(main())


if __name__ == "__main__":
    run()
