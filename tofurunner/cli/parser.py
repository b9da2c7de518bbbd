"""
tofu-runner command-line entry point.

Every argument except ``--tofu-version VERSION`` is handed to OpenTofu
untouched, so the command line is split by hand instead of going through
argparse (which would reject or rewrite tofu's own flags).
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import requests

from tofurunner.config.resolver import DEFAULT_LOG_LEVEL, resolve_configuration
from tofurunner.core.exceptions import TofuRunnerError
from tofurunner.tools import executor
from tofurunner.tools.installer import ensure_installed

logger = logging.getLogger(__name__)


class CLI:
    """tofu-runner command-line interface."""

    def __init__(
        self,
        base_dir: Optional[Path] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize CLI.

        Args:
            base_dir: Cache base directory (defaults to the current directory)
            session: Optional requests session used for downloads
        """
        self.base_dir = base_dir
        self.session = session

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Resolve, install and run OpenTofu.

        Args:
            argv: Command line arguments (defaults to sys.argv[1:])

        Returns:
            OpenTofu's exit code, 1 if the wrapper itself failed, or 130
            if interrupted before OpenTofu started
        """
        if argv is None:
            argv = sys.argv[1:]

        self._configure_logging(DEFAULT_LOG_LEVEL)

        try:
            config = resolve_configuration(argv, base_dir=self.base_dir)
            self._configure_logging(config.log_level)
            logger.debug(f"Resolved configuration: {config}")

            binary_path = ensure_installed(
                config.version,
                config.os,
                config.arch,
                config.base_dir,
                session=self.session,
            )
            return executor.run(binary_path, config.forwarded_args)

        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except TofuRunnerError as e:
            logger.error(str(e))
            logger.debug("Failure details", exc_info=True)
            return 1
        except Exception as e:
            logger.error(f"Error: {e}")
            logger.debug("Failure details", exc_info=True)
            return 1

    def _configure_logging(self, level_name: str):
        """
        Send wrapper diagnostics to stderr; stdout belongs to tofu.

        Args:
            level_name: Logging level name (e.g. 'INFO', 'DEBUG')
        """
        level = getattr(logging, level_name, logging.INFO)
        if level <= logging.DEBUG:
            format_str = "%(levelname)s [%(name)s] %(message)s"
        else:
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stderr,
            force=True,  # Reconfigure if already configured
        )


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
