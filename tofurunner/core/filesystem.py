"""
File system utilities for tofu-runner.

This module provides:
- Safe zip extraction (directory traversal is rejected)
- Temporary scratch directories with guaranteed cleanup
- Best-effort executable permission handling
"""

import logging
import os
import shutil
import stat
import tempfile
import zipfile
import zlib
from contextlib import contextmanager
from pathlib import Path
from typing import Union

from tofurunner.core.exceptions import (
    ExtractionError,
    InsecureArchiveError,
    UnsupportedArchiveFormat,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """Check whether path is located under parent."""
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def extract_archive(
    archive_path: Union[str, Path], destination: Union[str, Path]
) -> None:
    """
    Extract a zip archive into destination, overwriting existing entries.

    All member paths are validated before anything is written.

    Raises:
        UnsupportedArchiveFormat: If the archive is not a .zip file
        ExtractionError: If the archive is missing, corrupt or unwritable
        InsecureArchiveError: If archive contains malicious paths
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ExtractionError(f"Archive not found: {archive_path}")

    if not archive_path.name.lower().endswith(".zip"):
        raise UnsupportedArchiveFormat(
            f"Unsupported archive format: {archive_path.suffix}. Supported: .zip"
        )

    destination.mkdir(parents=True, exist_ok=True)

    try:
        _extract_zip(archive_path, destination)
    except ExtractionError:
        raise
    except (
        zipfile.BadZipFile,
        zlib.error,
        OSError,
        RuntimeError,  # encrypted members
        NotImplementedError,  # unsupported compression method
    ) as e:
        raise ExtractionError(f"Failed to extract {archive_path}: {e}") from e


def _extract_zip(archive_path: Path, destination: Path) -> None:
    """Extract a ZIP archive."""
    with zipfile.ZipFile(archive_path, "r") as zf:
        members = zf.namelist()

        for member in members:
            _validate_archive_path(member, destination)

        for member in members:
            zf.extract(member, destination)


# ============================================================================
# Permissions
# ============================================================================


def make_executable(path: Union[str, Path]) -> bool:
    """
    Add execute permission bits to a file.

    Failures are logged and reported through the return value rather than
    raised; a missing bit shows up later when the file is executed.

    Returns:
        True if permissions were updated
    """
    path = Path(path)
    try:
        mode = path.stat().st_mode
        os.chmod(path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return True
    except OSError as e:
        logger.warning(f"Failed to mark {path} as executable: {e}")
        return False


# ============================================================================
# Temporary File/Directory Management
# ============================================================================


@contextmanager
def temporary_directory(prefix: str = "tofurunner_"):
    """
    Context manager for temporary directory with automatic cleanup.

    The directory is removed on every exit path, including exceptions.

    Example:
        >>> with temporary_directory() as tmp:
        ...     (tmp / 'archive.zip').write_bytes(data)
    """
    temp_dir = Path(tempfile.mkdtemp(prefix=prefix))

    try:
        yield temp_dir
    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)
        if temp_dir.exists():
            logger.warning(f"Failed to remove temporary directory {temp_dir}")


__all__ = [
    "is_relative_to",
    "extract_archive",
    "make_executable",
    "temporary_directory",
]
