"""
Package-manager backends.

Each backend turns a package target into the native command line for one
platform: Homebrew on macOS, apt plus snap on Ubuntu/Debian. Methods return
True when the command exited 0.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import structlog

from devsetup.setup.runner import CommandRunner

logger = structlog.get_logger(__name__)


class PackageBackend(ABC):
    """Native package manager for one platform."""

    name: str = ""
    binary: str = ""
    manual_install_url: str = ""

    def __init__(self, runner: CommandRunner) -> None:
        self._runner = runner

    def is_available(self) -> bool:
        """Check if the package manager binary resolves on PATH."""
        return self._runner.which(self.binary) is not None

    @abstractmethod
    def install_native(self, target: str) -> bool:
        """Install a regular package."""

    @abstractmethod
    def install_gui(self, target: str) -> bool:
        """Install a GUI application (cask or snap)."""

    @abstractmethod
    def add_source(self, source: str) -> bool:
        """Register a third-party package source."""

    @abstractmethod
    def upgrade_native(self, target: str) -> bool:
        """Upgrade an installed regular package."""

    @abstractmethod
    def upgrade_gui(self, target: str) -> bool:
        """Upgrade an installed GUI application."""


class HomebrewBackend(PackageBackend):
    """Homebrew formulae, casks and taps."""

    name = "Homebrew"
    binary = "brew"
    manual_install_url = "https://brew.sh"

    def install_native(self, target: str) -> bool:
        return self._runner.run(["brew", "install", target]) == 0

    def install_gui(self, target: str) -> bool:
        return self._runner.run(["brew", "install", "--cask", target]) == 0

    def add_source(self, source: str) -> bool:
        return self._runner.run(["brew", "tap", source], quiet=True) == 0

    def upgrade_native(self, target: str) -> bool:
        return self._runner.run(["brew", "upgrade", target], quiet=True) == 0

    def upgrade_gui(self, target: str) -> bool:
        return self._runner.run(["brew", "upgrade", "--cask", target], quiet=True) == 0


class AptBackend(PackageBackend):
    """apt packages, with snap for GUI applications."""

    name = "APT"
    binary = "apt-get"
    manual_install_url = "https://wiki.debian.org/Apt"

    def __init__(self, runner: CommandRunner, use_sudo: bool = True) -> None:
        """
        Initialize the apt backend.

        Args:
            runner: Command runner.
            use_sudo: Whether to prefix apt and snap commands with sudo.
        """
        super().__init__(runner)
        self._sudo = ["sudo"] if use_sudo else []

    def install_native(self, target: str) -> bool:
        return self._runner.run([*self._sudo, "apt-get", "install", "-y", target]) == 0

    def install_gui(self, target: str) -> bool:
        return self._runner.run([*self._sudo, "snap", "install", target]) == 0

    def add_source(self, source: str) -> bool:
        logger.warning("apt_source_unsupported", source=source)
        return False

    def upgrade_native(self, target: str) -> bool:
        return self._runner.run(
            [*self._sudo, "apt-get", "install", "--only-upgrade", "-y", target],
            quiet=True,
        ) == 0

    def upgrade_gui(self, target: str) -> bool:
        return self._runner.run([*self._sudo, "snap", "refresh", target], quiet=True) == 0
