"""
devsetup: first-time setup for macOS and Ubuntu/Debian developer workstations.

This package detects the host OS, installs a fixed set of packages and
applications through Homebrew, apt, snap or vendor install scripts, runs a few
interactive post-install steps and reports what ended up installed.
"""

from importlib.metadata import version

__version__ = version("devsetup")
__all__ = ["__version__"]
