"""
devsetup package registries.

Static, per-platform package tables and the data model they are built from.
"""

from devsetup.packages.macos import MACOS_MANUAL_STEPS, MACOS_REGISTRY
from devsetup.packages.models import (
    CommandProbe,
    PackageDescriptor,
    PackageKind,
    PackageRegistry,
    PathProbe,
    Probe,
    ShellProbe,
)
from devsetup.packages.ubuntu import UBUNTU_MANUAL_STEPS, UBUNTU_REGISTRY

__all__ = [
    # Model
    "PackageKind",
    "PackageDescriptor",
    "PackageRegistry",
    "Probe",
    "CommandProbe",
    "PathProbe",
    "ShellProbe",
    # Tables
    "MACOS_REGISTRY",
    "MACOS_MANUAL_STEPS",
    "UBUNTU_REGISTRY",
    "UBUNTU_MANUAL_STEPS",
]
