"""
devsetup Setup Package.

Probing, installing and reporting on workstation packages, plus the
interactive account steps and per-OS platform profiles.
"""

from devsetup.setup.backends import AptBackend, HomebrewBackend, PackageBackend
from devsetup.setup.checker import StateProber
from devsetup.setup.events import SetupEvents
from devsetup.setup.installer import InstallerDispatcher, InstallOutcome, InstallResult
from devsetup.setup.orchestrator import SetupOrchestrator
from devsetup.setup.platforms import PLATFORMS, PlatformProfile, get_platform
from devsetup.setup.reporter import PackageStatus, SetupReporter, SetupSummary
from devsetup.setup.runner import CommandRunner
from devsetup.setup.scripts import ScriptContext, get_script, installer_script

__all__ = [
    "CommandRunner",
    "SetupEvents",
    "PackageBackend",
    "HomebrewBackend",
    "AptBackend",
    "ScriptContext",
    "installer_script",
    "get_script",
    "StateProber",
    "InstallerDispatcher",
    "InstallOutcome",
    "InstallResult",
    "SetupOrchestrator",
    "SetupReporter",
    "SetupSummary",
    "PackageStatus",
    "PlatformProfile",
    "PLATFORMS",
    "get_platform",
]
