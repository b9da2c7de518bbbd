"""
Run configuration resolution.

Process-wide state (command line, environment, working directory, host
platform) is read once at startup into an immutable RunConfiguration that
is then passed explicitly to the installer and executor.

Version precedence, highest first:
    1. ``--tofu-version VERSION`` on the command line
    2. ``TOFU_RUNNER_VERSION`` environment variable
    3. ``version:`` in ``.tofu-runner.yaml`` in the base directory
    4. DEFAULT_TOFU_VERSION

Without the flag the version is therefore DEFAULT_TOFU_VERSION only when
neither the environment variable nor the project file sets one; this is the
one place the resolved version can differ from the built-in default.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import yaml

from tofurunner.core.exceptions import ConfigurationError
from tofurunner.core.platform import Architecture, OperatingSystem, detect_platform

logger = logging.getLogger(__name__)

DEFAULT_TOFU_VERSION = "1.9.0"
VERSION_FLAG = "--tofu-version"
CONFIG_FILE_NAME = ".tofu-runner.yaml"
VERSION_ENV_VAR = "TOFU_RUNNER_VERSION"
LOG_LEVEL_ENV_VAR = "TOFU_RUNNER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class RunConfiguration:
    """
    Everything needed to install and launch OpenTofu for one invocation.

    Attributes:
        version: OpenTofu version to run
        os: Host operating system
        arch: Host CPU architecture
        forwarded_args: Arguments passed through to tofu
        base_dir: Directory the .tofu cache is created under
        log_level: Logging level name for wrapper diagnostics
    """

    version: str
    os: OperatingSystem
    arch: Architecture
    forwarded_args: Tuple[str, ...]
    base_dir: Path
    log_level: str = DEFAULT_LOG_LEVEL


def split_arguments(
    args: Sequence[str], default_version: str = DEFAULT_TOFU_VERSION
) -> Tuple[str, List[str]]:
    """
    Separate the version flag from arguments meant for tofu.

    ``--tofu-version VALUE`` is consumed and VALUE becomes the version.
    A trailing ``--tofu-version`` without a value is forwarded as-is.
    default_version is the fallback for flagless input; resolve_configuration
    passes the env/file override here, not always DEFAULT_TOFU_VERSION.

    Example:
        >>> split_arguments(["apply", "--tofu-version", "1.7.0", "-auto-approve"])
        ('1.7.0', ['apply', '-auto-approve'])
        >>> split_arguments(["plan", "--tofu-version"])
        ('1.9.0', ['plan', '--tofu-version'])
    """
    version = default_version
    forwarded: List[str] = []

    i = 0
    while i < len(args):
        if args[i] == VERSION_FLAG and i + 1 < len(args):
            version = args[i + 1]
            i += 2
            continue
        forwarded.append(args[i])
        i += 1

    return version, forwarded


def load_project_config(base_dir: Path) -> Dict[str, Any]:
    """
    Load ``.tofu-runner.yaml`` from base_dir.

    Returns:
        Configuration dictionary (empty if the file doesn't exist)

    Raises:
        ConfigurationError: If the file is unreadable, not valid YAML,
            or not a mapping
    """
    config_file = Path(base_dir) / CONFIG_FILE_NAME
    if not config_file.exists():
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {config_file}: {e}") from e

    config = config or {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"{config_file} must contain a mapping")

    version = config.get("version")
    if version is not None and not isinstance(version, str):
        raise ConfigurationError(
            f"'version' in {config_file} must be a string "
            f"(quote it, e.g. version: \"{version}\")"
        )

    return config


def normalize_log_level(level: Optional[str]) -> str:
    """Return a valid logging level name, falling back to INFO."""
    if level and str(level).upper() in _LOG_LEVELS:
        return str(level).upper()
    if level:
        logger.debug(f"Unknown log level '{level}', using {DEFAULT_LOG_LEVEL}")
    return DEFAULT_LOG_LEVEL


def resolve_configuration(
    args: Sequence[str],
    base_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> RunConfiguration:
    """
    Build the RunConfiguration for this invocation.

    Args:
        args: Raw command-line arguments (without program name)
        base_dir: Cache base directory (defaults to the current directory)
        environ: Environment mapping (defaults to os.environ)

    Raises:
        ConfigurationError: If the project config file is invalid
        UnsupportedPlatformError: If the CPU architecture is not supported
    """
    base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
    environ = os.environ if environ is None else environ

    config = load_project_config(base_dir)
    default_version = (
        environ.get(VERSION_ENV_VAR) or config.get("version") or DEFAULT_TOFU_VERSION
    )
    version, forwarded = split_arguments(args, default_version)

    log_level = normalize_log_level(
        environ.get(LOG_LEVEL_ENV_VAR) or config.get("log_level")
    )

    platform_info = detect_platform()

    return RunConfiguration(
        version=version,
        os=platform_info.os,
        arch=platform_info.arch,
        forwarded_args=tuple(forwarded),
        base_dir=base_dir,
        log_level=log_level,
    )


__all__ = [
    "DEFAULT_TOFU_VERSION",
    "VERSION_FLAG",
    "CONFIG_FILE_NAME",
    "VERSION_ENV_VAR",
    "LOG_LEVEL_ENV_VAR",
    "RunConfiguration",
    "split_arguments",
    "load_project_config",
    "normalize_log_level",
    "resolve_configuration",
]
