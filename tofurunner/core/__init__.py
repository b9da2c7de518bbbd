"""
Core functionality for tofu-runner.

This package contains the foundational modules that other components depend on.
"""

from .platform import (
    OperatingSystem,
    Architecture,
    PlatformInfo,
    detect_platform,
    clear_platform_cache,
)

from .exceptions import (
    TofuRunnerError,
    ConfigurationError,
    UnsupportedPlatformError,
    InstallError,
    DownloadError,
    ExtractionError,
    UnsupportedArchiveFormat,
    InsecureArchiveError,
    ProcessStartError,
)

__all__ = [
    # Platform
    "OperatingSystem",
    "Architecture",
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    # Exceptions
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
