"""
Cache layout and release URL construction.

All functions here are pure string/path compositions: they never touch
the filesystem or the network.
"""

from pathlib import Path
from typing import Union

from tofurunner.core.platform import Architecture, OperatingSystem

TOOL_NAME = "tofu"
CACHE_DIR_NAME = ".tofu"
RELEASE_BASE_URL = "https://github.com/opentofu/opentofu/releases/download"

OsTag = Union[OperatingSystem, str]
ArchTag = Union[Architecture, str]


def _tag(value) -> str:
    # str-mixin enums format as "Class.MEMBER" on newer interpreters
    return value.value if isinstance(value, (OperatingSystem, Architecture)) else value


def get_binary_name(os: OsTag) -> str:
    """Name of the OpenTofu executable on the given OS."""
    return f"{TOOL_NAME}.exe" if _tag(os) == OperatingSystem.WINDOWS.value else TOOL_NAME


def get_cache_dir(base_dir: Union[str, Path], version: str) -> Path:
    """Directory holding the extracted release for a version."""
    return Path(base_dir) / CACHE_DIR_NAME / version


def get_binary_path(base_dir: Union[str, Path], version: str, os: OsTag) -> Path:
    """
    Path to the cached executable.

    Example:
        >>> get_binary_path("/projects/myapp", "1.9.0", "windows")
        PosixPath('/projects/myapp/.tofu/1.9.0/tofu.exe')
    """
    return get_cache_dir(base_dir, version) / get_binary_name(os)


def get_archive_name(version: str, os: OsTag, arch: ArchTag) -> str:
    """Release archive file name, e.g. 'tofu_1.9.0_linux_amd64.zip'."""
    return f"{TOOL_NAME}_{version}_{_tag(os)}_{_tag(arch)}.zip"


def get_download_url(version: str, os: OsTag, arch: ArchTag) -> str:
    """
    Release archive URL for a version and platform.

    Example:
        >>> get_download_url("1.9.0", "linux", "amd64")
        'https://github.com/opentofu/opentofu/releases/download/v1.9.0/tofu_1.9.0_linux_amd64.zip'
    """
    return f"{RELEASE_BASE_URL}/v{version}/{get_archive_name(version, os, arch)}"


__all__ = [
    "TOOL_NAME",
    "CACHE_DIR_NAME",
    "RELEASE_BASE_URL",
    "get_binary_name",
    "get_cache_dir",
    "get_binary_path",
    "get_archive_name",
    "get_download_url",
]
