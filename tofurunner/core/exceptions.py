"""
Centralized exception hierarchy for tofu-runner.

Every failure the launcher can report before handing control to the
wrapped binary derives from TofuRunnerError, so the CLI can catch a single
base class and turn it into a diagnostic plus a non-zero exit status.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class TofuRunnerError(Exception):
    """Base exception for all tofu-runner errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(TofuRunnerError):
    """Raised when the project configuration file cannot be used."""

    pass


class UnsupportedPlatformError(TofuRunnerError):
    """Raised when the host CPU architecture has no OpenTofu release."""

    def __init__(self, machine: str):
        self.machine = machine
        super().__init__(f"Unsupported architecture: {machine}")


# ============================================================================
# Installation Exceptions
# ============================================================================


class InstallError(TofuRunnerError):
    """Base exception for failures while installing a release."""

    pass


class DownloadError(InstallError):
    """Raised when the release archive cannot be downloaded."""

    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status_code = status_code
        if status_code is not None:
            msg = f"Failed to download OpenTofu: HTTP {status_code}"
        else:
            msg = f"Failed to download OpenTofu: {reason or 'request failed'}"
        super().__init__(f"{msg}\nURL: {url}")


class ExtractionError(InstallError):
    """Raised when the release archive cannot be extracted."""

    pass


class UnsupportedArchiveFormat(ExtractionError):
    """Archive format is not supported."""

    pass


class InsecureArchiveError(ExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Execution Exceptions
# ============================================================================


class ProcessStartError(TofuRunnerError):
    """Raised when the cached binary cannot be started."""

    def __init__(self, binary_path, reason: str):
        self.binary_path = binary_path
        super().__init__(f"Failed to start OpenTofu process {binary_path}: {reason}")


__all__ = [
    "TofuRunnerError",
    "ConfigurationError",
    "UnsupportedPlatformError",
    "InstallError",
    "DownloadError",
    "ExtractionError",
    "UnsupportedArchiveFormat",
    "InsecureArchiveError",
    "ProcessStartError",
]
