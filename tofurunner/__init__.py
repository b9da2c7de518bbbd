"""
tofu-runner - version-pinning launcher for OpenTofu.

Downloads a pinned OpenTofu release into a project-local cache and runs it
with the forwarded command-line arguments.
"""

__version__ = "0.1.0"
