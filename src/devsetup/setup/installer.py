"""
Per-package install dispatch.

The dispatcher probes a descriptor, upgrades it best-effort if it is already
present, and otherwise installs it through the backend that matches its kind.
A failed install is a result, not an exception, so the caller can move on to
the next package.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import structlog

from devsetup.errors import RegistryError
from devsetup.packages.models import PackageDescriptor, PackageKind, PackageRegistry
from devsetup.setup.backends import PackageBackend
from devsetup.setup.checker import StateProber
from devsetup.setup.events import SetupEvents
from devsetup.setup.scripts import ScriptContext, get_script, has_script

logger = structlog.get_logger(__name__)


class InstallOutcome(str, Enum):
    """Outcome of a single install attempt."""

    INSTALLED = "installed"
    ALREADY_PRESENT = "already_present"
    FAILED = "failed"


@dataclass
class InstallResult:
    """Result of a package installation attempt."""

    key: str
    display_name: str
    outcome: InstallOutcome
    message: str = ""

    @property
    def success(self) -> bool:
        return self.outcome != InstallOutcome.FAILED


Handler = Callable[[PackageDescriptor], bool]


class InstallerDispatcher:
    """
    Install or upgrade packages through the platform backend.

    Each PackageKind has exactly one install handler and one upgrade handler;
    construction fails if a kind is left unhandled.
    """

    def __init__(
        self,
        backend: PackageBackend,
        prober: StateProber,
        context: ScriptContext,
        events: SetupEvents | None = None,
        upgrade_existing: bool = True,
    ) -> None:
        """
        Initialize the dispatcher.

        Args:
            backend: Package manager for this platform.
            prober: Installed-state checker.
            context: Context handed to installer scripts.
            events: Receiver for progress messages.
            upgrade_existing: Whether to upgrade packages that are already present.
                The bootstrap entry's update script runs either way.
        """
        self._backend = backend
        self._prober = prober
        self._context = context
        self._events = events or context.events
        self._upgrade_existing = upgrade_existing

        self._installers: dict[PackageKind, Handler] = {
            PackageKind.NATIVE: self._install_native,
            PackageKind.GUI: self._install_gui,
            PackageKind.TAP: self._install_tap,
            PackageKind.SCRIPT: self._run_script,
        }
        self._upgraders: dict[PackageKind, Handler] = {
            PackageKind.NATIVE: lambda d: backend.upgrade_native(d.target),
            PackageKind.GUI: lambda d: backend.upgrade_gui(d.target),
            PackageKind.TAP: lambda d: backend.upgrade_native(d.target),
            PackageKind.SCRIPT: self._run_update_script,
        }
        for table in (self._installers, self._upgraders):
            missing = set(PackageKind) - set(table)
            if missing:
                raise RegistryError(f"No handler for package kinds: {sorted(k.value for k in missing)}")

    def validate(self, registry: PackageRegistry) -> None:
        """
        Check that every installer script the registry names is registered.

        Raises:
            RegistryError: If a SCRIPT target or update script is unknown.
        """
        for descriptor in registry:
            names = [descriptor.update_script] if descriptor.update_script else []
            if descriptor.kind == PackageKind.SCRIPT:
                names.append(descriptor.target)
            for name in names:
                if not has_script(name):
                    raise RegistryError(
                        f"Package '{descriptor.key}' in {registry.name} registry uses unknown installer script '{name}'"
                    )

    def install(self, descriptor: PackageDescriptor) -> InstallResult:
        """
        Install a single package, or upgrade it if already present.

        Args:
            descriptor: Package to install.

        Returns:
            InstallResult with the outcome.
        """
        name = descriptor.display_name
        self._events.progress(f"Installing {name}...")

        if self._prober.is_installed(descriptor):
            self._events.warning(f"{name} already installed")
            # Bootstrap entries always refresh the package index
            if self._upgrade_existing or descriptor.bootstrap:
                self._upgrade(descriptor)
            return InstallResult(
                key=descriptor.key,
                display_name=name,
                outcome=InstallOutcome.ALREADY_PRESENT,
                message=f"{name} is already installed",
            )

        logger.info("package_install_started", package=descriptor.key, kind=descriptor.kind.value)
        try:
            ok = self._installers[descriptor.kind](descriptor)
        except Exception as e:
            logger.error("package_install_error", package=descriptor.key, error=str(e), error_type=type(e).__name__)
            ok = False

        if not ok:
            logger.warning("package_install_failed", package=descriptor.key)
            self._events.error(f"{name} installation failed")
            return InstallResult(
                key=descriptor.key,
                display_name=name,
                outcome=InstallOutcome.FAILED,
                message=f"Failed to install {name}",
            )

        if not descriptor.needs_new_shell and not self._prober.is_installed(descriptor):
            logger.warning("package_installed_but_not_detected", package=descriptor.key)

        logger.info("package_installed", package=descriptor.key)
        self._events.success(f"{name} installed")
        return InstallResult(
            key=descriptor.key,
            display_name=name,
            outcome=InstallOutcome.INSTALLED,
            message=f"Installed {name}",
        )

    def _upgrade(self, descriptor: PackageDescriptor) -> None:
        try:
            upgraded = self._upgraders[descriptor.kind](descriptor)
        except Exception as e:
            logger.info("package_upgrade_error", package=descriptor.key, error=str(e))
            return
        if not upgraded:
            logger.info("package_upgrade_skipped", package=descriptor.key)

    def _install_native(self, descriptor: PackageDescriptor) -> bool:
        return self._backend.install_native(descriptor.target)

    def _install_gui(self, descriptor: PackageDescriptor) -> bool:
        return self._backend.install_gui(descriptor.target)

    def _install_tap(self, descriptor: PackageDescriptor) -> bool:
        # Already-registered taps fail harmlessly
        if not self._backend.add_source(descriptor.tap_name):
            logger.debug("package_source_not_added", package=descriptor.key, source=descriptor.tap_name)
        return self._backend.install_native(descriptor.target)

    def _run_script(self, descriptor: PackageDescriptor) -> bool:
        return get_script(descriptor.target)(self._context)

    def _run_update_script(self, descriptor: PackageDescriptor) -> bool:
        if not descriptor.update_script:
            return True
        return get_script(descriptor.update_script)(self._context)
