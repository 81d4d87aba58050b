"""
Exceptions raised by devsetup.

Fatal conditions (unsupported OS, missing platform profile, failed
package-manager bootstrap, no usable shell) abort the run with exit code 1.
Individual package failures are not exceptions; they are reported as
``InstallResult`` values and the run continues.
"""

from __future__ import annotations


class SetupError(Exception):
    """Base class for all devsetup errors."""

    hint: str | None = None

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        if hint is not None:
            self.hint = hint


class UnsupportedOSError(SetupError):
    """Raised when the host OS is not macOS or Ubuntu/Debian."""

    hint = "Supported systems: macOS, Ubuntu, Debian"


class PlatformNotFoundError(SetupError):
    """Raised when a supported OS has no registered platform profile."""


class BootstrapError(SetupError):
    """Raised when the package manager itself could not be installed."""


class ShellSetupError(SetupError):
    """Raised when zsh is missing and could not be installed."""


class RegistryError(SetupError):
    """Raised when a package registry violates its invariants."""


class PackageNotFoundError(SetupError):
    """Raised when a package key is not in the registry."""


class UnknownInstallerScriptError(SetupError):
    """Raised when an installer script name is not registered."""
