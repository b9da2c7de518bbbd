"""
OpenTofu release installer.

Downloads a pinned OpenTofu release from GitHub and unpacks it into the
project-local cache (``<base_dir>/.tofu/<version>``). An installed release
is detected purely by the presence of its executable.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import requests

from tofurunner.core.download import download_file
from tofurunner.core.exceptions import ExtractionError
from tofurunner.core.filesystem import (
    extract_archive,
    make_executable,
    temporary_directory,
)
from tofurunner.core.platform import Architecture, OperatingSystem
from tofurunner.tools.paths import (
    get_archive_name,
    get_binary_path,
    get_cache_dir,
    get_download_url,
)

logger = logging.getLogger(__name__)


class TofuInstaller:
    """
    Download and install an OpenTofu release.

    Downloads the release zip from GitHub and extracts it into a
    version-specific cache directory.
    """

    def __init__(
        self,
        base_dir: Union[str, Path],
        version: str,
        os: OperatingSystem,
        arch: Architecture,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize installer.

        Args:
            base_dir: Directory the cache lives under (usually the working directory)
            version: OpenTofu version to install (without 'v' prefix)
            os: Target operating system
            arch: Target CPU architecture
            session: Optional requests session for the download
        """
        self.base_dir = Path(base_dir)
        self.version = version
        self.os = OperatingSystem(os)
        self.arch = Architecture(arch)
        self.session = session
        self.install_dir = get_cache_dir(self.base_dir, version)
        self.binary_path = get_binary_path(self.base_dir, version, self.os)

    def is_installed(self) -> bool:
        """
        Check if the release is already installed.

        Returns:
            True if the tofu executable exists, False otherwise
        """
        return self.binary_path.exists()

    def get_executable_path(self) -> Optional[Path]:
        """
        Get path to the tofu executable.

        Returns:
            Path to executable if installed, None otherwise
        """
        return self.binary_path if self.is_installed() else None

    def install(self) -> Path:
        """
        Install the release if it is not cached yet.

        Returns:
            Path to the tofu executable

        Raises:
            DownloadError: If the archive cannot be downloaded
            ExtractionError: If the archive cannot be unpacked
        """
        if self.is_installed():
            logger.debug(f"OpenTofu {self.version} found at {self.binary_path}")
            return self.binary_path

        self.install_dir.mkdir(parents=True, exist_ok=True)

        url = get_download_url(self.version, self.os, self.arch)
        logger.info(
            f"Downloading OpenTofu {self.version} for "
            f"{self.os.value}/{self.arch.value}..."
        )
        logger.debug(f"OpenTofu download URL: {url}")

        with temporary_directory() as download_dir:
            archive_path = download_dir / get_archive_name(
                self.version, self.os, self.arch
            )
            download_file(url, archive_path, session=self.session)

            try:
                extract_archive(archive_path, self.install_dir)
            except BaseException:
                # Ctrl+C included; a truncated binary must not pass is_installed()
                self._discard_partial_binary()
                raise

        if not self.is_installed():
            raise ExtractionError(
                f"Archive did not contain {self.binary_path.name}: {url}"
            )

        if self.os != OperatingSystem.WINDOWS:
            make_executable(self.binary_path)

        logger.info(f"OpenTofu {self.version} installed to {self.install_dir}")
        return self.binary_path

    def _discard_partial_binary(self):
        """Remove a partially extracted executable so the next run retries."""
        try:
            self.binary_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to remove partial binary {self.binary_path}: {e}")


def ensure_installed(
    version: str,
    os: OperatingSystem,
    arch: Architecture,
    base_dir: Union[str, Path],
    session: Optional[requests.Session] = None,
) -> Path:
    """
    Make sure an OpenTofu release is present in the cache.

    Returns:
        Path to the tofu executable

    Raises:
        DownloadError: If the archive cannot be downloaded
        ExtractionError: If the archive cannot be unpacked
    """
    return TofuInstaller(base_dir, version, os, arch, session=session).install()


__all__ = ["TofuInstaller", "ensure_installed"]
