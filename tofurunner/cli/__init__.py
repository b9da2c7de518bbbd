"""Command-line interface for tofu-runner."""

from .parser import main

__all__ = ["main"]
