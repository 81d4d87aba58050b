"""
Install every package in a registry, in order.

The bootstrap entry (the package manager itself) is a hard prerequisite: if
the manager is not usable afterwards the whole run stops. Every other package
is independent and a failure never blocks the next one. Nothing is rolled back.
"""

from __future__ import annotations

import structlog

from devsetup.errors import BootstrapError
from devsetup.packages.models import PackageRegistry
from devsetup.setup.backends import PackageBackend
from devsetup.setup.installer import InstallerDispatcher, InstallResult

logger = structlog.get_logger(__name__)


class SetupOrchestrator:
    """Drives the dispatcher over a registry."""

    def __init__(
        self,
        registry: PackageRegistry,
        dispatcher: InstallerDispatcher,
        backend: PackageBackend,
    ) -> None:
        self._registry = registry
        self._dispatcher = dispatcher
        self._backend = backend
        self._bootstrapped = False

    def ensure_bootstrap(self) -> InstallResult | None:
        """
        Install the package manager if the registry has a bootstrap entry.

        Runs at most once per orchestrator.

        Returns:
            The bootstrap InstallResult, or None if already done or not needed.

        Raises:
            BootstrapError: If the manager binary is not on PATH afterwards.
        """
        bootstrap = self._registry.bootstrap
        if bootstrap is None or self._bootstrapped:
            return None

        result = self._dispatcher.install(bootstrap)
        if not self._backend.is_available():
            logger.error(
                "bootstrap_failed",
                package=bootstrap.key,
                outcome=result.outcome.value,
                binary=self._backend.binary,
            )
            raise BootstrapError(
                f"{bootstrap.display_name} installation failed - cannot continue",
                hint=f"Please install {self._backend.name} manually: {self._backend.manual_install_url}",
            )

        self._bootstrapped = True
        return result

    def run(self) -> list[InstallResult]:
        """
        Bootstrap the package manager, then install every other package.

        Returns:
            Results for the non-bootstrap packages, in registry order.
        """
        self.ensure_bootstrap()

        results = [self._dispatcher.install(descriptor) for descriptor in self._registry.members]

        logger.info(
            "setup_packages_processed",
            registry=self._registry.name,
            total=len(results),
            failed=sum(1 for r in results if not r.success),
        )
        return results
