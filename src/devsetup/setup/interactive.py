"""
Interactive and account-level setup steps.

These run around the package install: making zsh the login shell, setting the
git identity, renaming the machine and (on Ubuntu) installing the user avatar.
Prompts go through an ``ask`` callable so the CLI can use rich prompts and
tests can script the answers.
"""

from __future__ import annotations

import re
import shutil
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

import structlog

from devsetup.errors import ShellSetupError
from devsetup.setup.backends import PackageBackend
from devsetup.setup.events import SetupEvents
from devsetup.setup.orchestrator import SetupOrchestrator
from devsetup.setup.runner import CommandRunner

logger = structlog.get_logger(__name__)

Ask = Callable[[str], str]

# RFC 1123 host label
HOSTNAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9-]{0,62}$")

ACCOUNTS_SERVICE_ICONS = Path("/var/lib/AccountsService/icons")


def is_valid_hostname(name: str) -> bool:
    return bool(HOSTNAME_PATTERN.match(name)) and not name.endswith("-")


def to_hostname(name: str) -> str:
    """Derive a host label from a display name: "Jane's MacBook" -> "Janes-MacBook"."""
    label = re.sub(r"[^A-Za-z0-9-]+", "-", name.replace("'", "")).strip("-")
    return label[:63].rstrip("-")


def ensure_default_shell(
    runner: CommandRunner,
    backend: PackageBackend,
    orchestrator: SetupOrchestrator,
    events: SetupEvents,
) -> str:
    """
    Make sure zsh is installed and is the login shell.

    If zsh is missing the package manager is bootstrapped (once per run) and
    zsh is installed through it.

    Returns:
        Path to the zsh binary.

    Raises:
        ShellSetupError: If zsh is still missing after the install attempt.
        BootstrapError: If the package manager could not be bootstrapped.
    """
    events.info("Checking for zsh...")
    zsh = runner.which("zsh")
    if zsh:
        events.success(f"Zsh is already installed: {zsh}")
    else:
        events.warning("Zsh not found. Installing...")
        orchestrator.ensure_bootstrap()
        backend.install_native("zsh")
        zsh = runner.which("zsh")
        if not zsh:
            logger.error("zsh_install_failed", backend=backend.name)
            raise ShellSetupError("Zsh installation failed")
        events.success(f"Zsh installed: {zsh}")

    current_shell = Path(runner.environ.get("SHELL", "")).name
    if current_shell != "zsh":
        events.info("Setting zsh as default shell...")
        if runner.run(["chsh", "-s", zsh]) == 0:
            events.success("Zsh set as default shell (will take effect after next login)")
        else:
            logger.warning("chsh_failed", shell=zsh)
            events.warning(f"Could not change the default shell, run 'chsh -s {zsh}' later")
    return zsh


def configure_git(runner: CommandRunner, ask: Ask, events: SetupEvents) -> bool:
    """Ask for the global git identity and set it when both parts are given."""
    name = ask("Enter your Git name (or press Enter to skip)").strip()
    email = ask("Enter your Git email (or press Enter to skip)").strip()

    if not name or not email:
        events.warning("Git configuration skipped")
        return False

    ok = (
        runner.run(["git", "config", "--global", "user.name", name]) == 0
        and runner.run(["git", "config", "--global", "user.email", email]) == 0
    )
    if ok:
        events.success(f"Git configured: {name} <{email}>")
    else:
        events.error("Git configuration failed")
    return ok


class DeviceNamer(ABC):
    """Reads and changes the machine name."""

    def __init__(self, runner: CommandRunner, use_sudo: bool = True) -> None:
        self._runner = runner
        self._sudo = ["sudo"] if use_sudo else []

    def accepts(self, name: str) -> bool:
        """Whether ``name`` can be applied as given."""
        return is_valid_hostname(name)

    @abstractmethod
    def current_name(self) -> str:
        """Current device name, or empty string if unknown."""

    @abstractmethod
    def set_name(self, name: str) -> bool:
        """Apply a new device name. True on success."""


class MacDeviceNamer(DeviceNamer):
    """
    macOS names via scutil.

    ComputerName keeps the name as typed. LocalHostName and HostName get the
    host label derived from it.
    """

    def current_name(self) -> str:
        return self._runner.capture(["scutil", "--get", "ComputerName"]) or ""

    def accepts(self, name: str) -> bool:
        return is_valid_hostname(to_hostname(name))

    def set_name(self, name: str) -> bool:
        label = to_hostname(name)
        names = {"ComputerName": name, "LocalHostName": label, "HostName": label}
        return all(
            self._runner.run([*self._sudo, "scutil", "--set", key, value]) == 0
            for key, value in names.items()
        )


class LinuxDeviceNamer(DeviceNamer):
    """Linux hostname via hostnamectl, keeping /etc/hosts in step."""

    def current_name(self) -> str:
        return self._runner.capture(["hostname"]) or ""

    def set_name(self, name: str) -> bool:
        if self._runner.run([*self._sudo, "hostnamectl", "set-hostname", name]) != 0:
            return False
        if self._runner.run([*self._sudo, "sed", "-i", f"s/127.0.1.1.*/127.0.1.1 {name}/", "/etc/hosts"]) != 0:
            logger.warning("hosts_file_not_updated", hostname=name)
        return True


def rename_device(namer: DeviceNamer, ask: Ask, events: SetupEvents) -> bool:
    """
    Offer to rename the machine.

    Returns:
        True if the device was renamed.
    """
    current = namer.current_name()
    new_name = ask(f"New device name (current: {current}, Enter to keep)").strip()

    if not new_name:
        events.info(f"Keeping current name: {current}")
        return False

    if not namer.accepts(new_name):
        events.warning(f"Invalid device name '{new_name}': use letters, digits and hyphens")
        return False

    if not namer.set_name(new_name):
        logger.warning("device_rename_failed", name=new_name)
        events.error(f"Could not rename device to {new_name}")
        return False

    events.success(f"Device renamed to: {new_name}")
    return True


def set_avatar(runner: CommandRunner, source: Path, events: SetupEvents, use_sudo: bool = True) -> bool:
    """
    Install the user avatar on a GNOME desktop.

    The image is always copied to ``~/.icons/avatar.jpeg``. When ``gsettings``
    is available it is also registered with AccountsService.
    """
    if not source.is_file():
        events.warning(f"Avatar file not found at {source}")
        return False

    home = runner.environ.get("HOME")
    icon_dir = (Path(home) if home else Path.home()) / ".icons"
    dest = icon_dir / "avatar.jpeg"
    try:
        icon_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, dest)
    except OSError as e:
        logger.warning("avatar_copy_failed", source=str(source), dest=str(dest), error=str(e))
        events.warning(f"Could not copy avatar to {dest}")
        return False
    logger.debug("avatar_copied", source=str(source), dest=str(dest))

    if not runner.which("gsettings"):
        events.info(f"Avatar copied to {dest}")
        return True

    user = runner.environ.get("USER", "")
    sudo = ["sudo"] if use_sudo else []
    if runner.run([*sudo, "cp", str(dest), str(ACCOUNTS_SERVICE_ICONS / user)], quiet=True) != 0:
        events.warning("Could not set system avatar, using local only")
    events.success(f"Avatar set from {source}")
    return True
