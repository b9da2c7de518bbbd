"""
Run the cached OpenTofu binary.

The child inherits stdin, stdout and stderr, so the wrapper stays invisible
to the tool's own I/O. Arguments are passed as an argv list; no shell is
involved.
"""

import logging
import subprocess
from pathlib import Path
from typing import Sequence, Union

from tofurunner.core.exceptions import ProcessStartError

logger = logging.getLogger(__name__)


def run(binary_path: Union[str, Path], forwarded_args: Sequence[str]) -> int:
    """
    Execute the binary and wait for it to finish.

    Args:
        binary_path: Path to the executable
        forwarded_args: Arguments passed to the executable unchanged

    Returns:
        The child's exit code. A child killed by signal N on POSIX
        reports 128 + N, matching shell conventions.

    Raises:
        ProcessStartError: If the process cannot be started
    """
    cmd = [str(binary_path), *forwarded_args]
    logger.debug(f"Running: {cmd}")

    try:
        process = subprocess.Popen(cmd)
    except OSError as e:
        raise ProcessStartError(binary_path, e.strerror or str(e)) from e

    returncode = _wait(process)
    if returncode < 0:
        return 128 - returncode
    return returncode


def _wait(process: subprocess.Popen) -> int:
    # Ctrl+C reaches the child through the shared process group; keep
    # waiting so its own exit code is what gets relayed.
    while True:
        try:
            return process.wait()
        except KeyboardInterrupt:
            logger.debug("Interrupt received, waiting for OpenTofu to exit")


__all__ = ["run"]
