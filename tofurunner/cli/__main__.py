"""
Entry point for running the tofu-runner CLI as a module.

Usage: python -m tofurunner.cli [--tofu-version VERSION] [tofu arguments...]
"""

from .parser import main

if __name__ == "__main__":
    main()
