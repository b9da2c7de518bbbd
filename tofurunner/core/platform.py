"""
Platform detection for tofu-runner.

Maps the running operating system and CPU architecture to the identifiers
OpenTofu uses in its release artifact names (e.g. 'linux' / 'amd64').

Usage:
    from tofurunner.core.platform import detect_platform

    platform_info = detect_platform()
    print(f"OS: {platform_info.os.value}")
    print(f"Architecture: {platform_info.arch.value}")
    print(f"Platform string: {platform_info.platform_string()}")
"""

import enum
import functools
import platform
from dataclasses import dataclass

from tofurunner.core.exceptions import UnsupportedPlatformError


class OperatingSystem(str, enum.Enum):
    """Operating system tags used in OpenTofu release names."""

    WINDOWS = "windows"
    DARWIN = "darwin"
    LINUX = "linux"


class Architecture(str, enum.Enum):
    """CPU architecture tags used in OpenTofu release names."""

    AMD64 = "amd64"
    ARM64 = "arm64"
    X86 = "386"


_MACHINE_ALIASES = {
    "x86_64": Architecture.AMD64,
    "amd64": Architecture.AMD64,
    "x64": Architecture.AMD64,
    "aarch64": Architecture.ARM64,
    "arm64": Architecture.ARM64,
    "i386": Architecture.X86,
    "i686": Architecture.X86,
    "x86": Architecture.X86,
}


@dataclass(frozen=True)
class PlatformInfo:
    """
    Host platform as seen by the release naming scheme.

    Attributes:
        os: Operating system tag
        arch: CPU architecture tag
    """

    os: OperatingSystem
    arch: Architecture

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux_amd64').

        Example:
            >>> PlatformInfo(OperatingSystem.LINUX, Architecture.AMD64).platform_string()
            'linux_amd64'
        """
        return f"{self.os.value}_{self.arch.value}"

    def __str__(self) -> str:
        return f"{self.os.value}/{self.arch.value}"


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.

    Raises:
        UnsupportedPlatformError: If the CPU architecture is not supported
    """
    return PlatformInfo(os=detect_os(), arch=detect_architecture())


def detect_os() -> OperatingSystem:
    """
    Detect operating system.

    Any Unix-like system other than macOS is treated as Linux.
    """
    system = platform.system().lower()

    if system == "windows":
        return OperatingSystem.WINDOWS
    elif system == "darwin":
        return OperatingSystem.DARWIN
    else:
        return OperatingSystem.LINUX


def detect_architecture() -> Architecture:
    """
    Detect CPU architecture.

    Raises:
        UnsupportedPlatformError: If the machine type has no release build
    """
    machine = platform.machine()
    return parse_architecture(machine)


def parse_architecture(machine: str) -> Architecture:
    """
    Normalize a machine name (as reported by platform.machine()).

    Raises:
        UnsupportedPlatformError: If the machine type has no release build
    """
    try:
        return _MACHINE_ALIASES[machine.lower()]
    except KeyError:
        raise UnsupportedPlatformError(machine) from None


def clear_platform_cache():
    """
    Clear the platform detection cache.

    Useful for testing.
    """
    detect_platform.cache_clear()


__all__ = [
    "OperatingSystem",
    "Architecture",
    "PlatformInfo",
    "detect_platform",
    "detect_os",
    "detect_architecture",
    "parse_architecture",
    "clear_platform_cache",
]
