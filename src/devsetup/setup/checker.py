"""
Installed-state checks for package descriptors.

Probes are read-only. Anything that goes wrong while probing means
"not installed"; the prober never raises for a failing probe.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from devsetup.packages.models import CommandProbe, PackageDescriptor, PathProbe, ShellProbe
from devsetup.setup.runner import CommandRunner

logger = structlog.get_logger(__name__)


class StateProber:
    """Answers "is this package already installed?"."""

    def __init__(self, runner: CommandRunner) -> None:
        self._runner = runner

    def is_installed(self, descriptor: PackageDescriptor) -> bool:
        """
        Evaluate the descriptor's probe with output suppressed.

        Args:
            descriptor: Package to check.

        Returns:
            True iff the probe succeeds.
        """
        probe = descriptor.probe
        try:
            if isinstance(probe, CommandProbe):
                installed = self._runner.which(probe.binary) is not None
            elif isinstance(probe, PathProbe):
                installed = probe.resolve(self._home()).exists()
            elif isinstance(probe, ShellProbe):
                installed = self._runner.succeeds(probe.argv)
            else:
                logger.error("unknown_probe_type", package=descriptor.key, probe=type(probe).__name__)
                return False
        except OSError as e:
            logger.debug("probe_failed", package=descriptor.key, error=str(e))
            return False

        logger.debug("package_probed", package=descriptor.key, installed=installed)
        return installed

    def _home(self) -> Path:
        home = self._runner.environ.get("HOME")
        return Path(home) if home else Path.home()
