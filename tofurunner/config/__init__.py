"""
Configuration for tofu-runner.

Resolves the OpenTofu version, host platform and forwarded arguments for a
single invocation.
"""

from .resolver import (
    DEFAULT_TOFU_VERSION,
    VERSION_FLAG,
    RunConfiguration,
    split_arguments,
    load_project_config,
    resolve_configuration,
)

__all__ = [
    "DEFAULT_TOFU_VERSION",
    "VERSION_FLAG",
    "RunConfiguration",
    "split_arguments",
    "load_project_config",
    "resolve_configuration",
]
