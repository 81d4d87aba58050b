"""
Post-run installation summary.

The summary is re-derived from the host by probing every package again; it
does not depend on what happened during the install run.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from devsetup.packages.models import PackageRegistry
from devsetup.setup.checker import StateProber

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PackageStatus:
    """Installed state of one package."""

    key: str
    display_name: str
    installed: bool


@dataclass(frozen=True)
class SetupSummary:
    """Tally of installed and missing packages."""

    statuses: tuple[PackageStatus, ...]

    @property
    def total(self) -> int:
        return len(self.statuses)

    @property
    def installed_count(self) -> int:
        return sum(1 for s in self.statuses if s.installed)

    @property
    def failed_count(self) -> int:
        return self.total - self.installed_count

    @property
    def failed_names(self) -> list[str]:
        return [s.display_name for s in self.statuses if not s.installed]

    @property
    def all_installed(self) -> bool:
        return self.failed_count == 0


class SetupReporter:
    """Builds a SetupSummary from current host state."""

    def __init__(self, prober: StateProber) -> None:
        self._prober = prober

    def summarize(self, registry: PackageRegistry) -> SetupSummary:
        """
        Probe every non-bootstrap package in the registry.

        The bootstrap entry is skipped: a run only gets this far if it is present.
        """
        summary = SetupSummary(
            statuses=tuple(
                PackageStatus(
                    key=d.key,
                    display_name=d.display_name,
                    installed=self._prober.is_installed(d),
                )
                for d in registry.members
            )
        )
        logger.info(
            "setup_summary",
            registry=registry.name,
            installed=summary.installed_count,
            failed=summary.failed_count,
        )
        return summary
