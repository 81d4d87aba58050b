"""
Per-OS platform profiles.

A profile bundles everything that differs between macOS and Ubuntu/Debian:
the package table, the package-manager backend, how the device is renamed,
the manual follow-up list and whether the avatar step applies.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from devsetup.config.environment import KNOWN_UNSUPPORTED, DetectedOS, HostOS
from devsetup.errors import PlatformNotFoundError, UnsupportedOSError
from devsetup.packages import MACOS_MANUAL_STEPS, MACOS_REGISTRY, UBUNTU_MANUAL_STEPS, UBUNTU_REGISTRY
from devsetup.packages.models import PackageRegistry
from devsetup.setup.backends import AptBackend, HomebrewBackend, PackageBackend
from devsetup.setup.interactive import DeviceNamer, LinuxDeviceNamer, MacDeviceNamer
from devsetup.setup.runner import CommandRunner

logger = structlog.get_logger(__name__)

BackendFactory = Callable[[CommandRunner, bool], PackageBackend]
NamerFactory = Callable[[CommandRunner, bool], DeviceNamer]


def _homebrew(runner: CommandRunner, use_sudo: bool) -> PackageBackend:
    # Homebrew refuses to run as root
    return HomebrewBackend(runner)


def _apt(runner: CommandRunner, use_sudo: bool) -> PackageBackend:
    return AptBackend(runner, use_sudo=use_sudo)


@dataclass(frozen=True)
class PlatformProfile:
    """Static setup profile for one host OS."""

    host_os: HostOS
    title: str
    registry: PackageRegistry
    backend_factory: BackendFactory
    namer_factory: NamerFactory
    manual_steps: tuple[tuple[str, str], ...] = ()
    supports_avatar: bool = False

    def create_backend(self, runner: CommandRunner, use_sudo: bool = True) -> PackageBackend:
        return self.backend_factory(runner, use_sudo)

    def create_namer(self, runner: CommandRunner, use_sudo: bool = True) -> DeviceNamer:
        return self.namer_factory(runner, use_sudo)

    def manual_steps_for(self, user: str, zsh: str = "zsh") -> list[tuple[str, str]]:
        """Manual follow-up steps with ``{user}`` and ``{zsh}`` filled in."""
        return [(title, text.format(user=user, zsh=zsh)) for title, text in self.manual_steps]


PLATFORMS: dict[HostOS, PlatformProfile] = {
    HostOS.MACOS: PlatformProfile(
        host_os=HostOS.MACOS,
        title="MacBook Setup",
        registry=MACOS_REGISTRY,
        backend_factory=_homebrew,
        namer_factory=MacDeviceNamer,
        manual_steps=MACOS_MANUAL_STEPS,
    ),
    HostOS.DEBIAN: PlatformProfile(
        host_os=HostOS.DEBIAN,
        title="Ubuntu Setup",
        registry=UBUNTU_REGISTRY,
        backend_factory=_apt,
        namer_factory=LinuxDeviceNamer,
        manual_steps=UBUNTU_MANUAL_STEPS,
        supports_avatar=True,
    ),
}


def get_platform(
    detected: DetectedOS,
    platforms: dict[HostOS, PlatformProfile] | None = None,
) -> PlatformProfile:
    """
    Select the profile for a detected OS.

    Args:
        detected: Result of OS detection.
        platforms: Profile table. Defaults to PLATFORMS.

    Raises:
        UnsupportedOSError: If the OS is not macOS or Ubuntu/Debian.
        PlatformNotFoundError: If a supported OS has no profile.
    """
    table = PLATFORMS if platforms is None else platforms

    if not detected.is_supported:
        logger.warning("unsupported_os", name=detected.name)
        if detected.name in KNOWN_UNSUPPORTED:
            raise UnsupportedOSError(f"{detected.label} detected but not yet supported")
        raise UnsupportedOSError(f"Unsupported operating system: {detected.label}")

    try:
        return table[detected.host_os]
    except KeyError:
        raise PlatformNotFoundError(f"No setup profile for {detected.label}") from None
