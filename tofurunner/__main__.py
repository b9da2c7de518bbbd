"""
Entry point for running tofu-runner as a module.

Usage: python -m tofurunner [--tofu-version VERSION] [tofu arguments...]
"""

from tofurunner.cli.parser import main

if __name__ == "__main__":
    main()
