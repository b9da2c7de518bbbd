"""
OpenTofu release management: cache layout, installation and execution.
"""

from .paths import (
    get_binary_name,
    get_cache_dir,
    get_binary_path,
    get_archive_name,
    get_download_url,
)
from .installer import TofuInstaller, ensure_installed
from .executor import run

__all__ = [
    "get_binary_name",
    "get_cache_dir",
    "get_binary_path",
    "get_archive_name",
    "get_download_url",
    "TofuInstaller",
    "ensure_installed",
    "run",
]
