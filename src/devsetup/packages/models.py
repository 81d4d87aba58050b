"""
Package registry data model.

A registry is an ordered, immutable table of package descriptors. Order is
install order; the optional bootstrap entry (the package manager itself) must
come first.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from devsetup.errors import PackageNotFoundError, RegistryError


class PackageKind(str, Enum):
    """Install backend category."""

    NATIVE = "native"  # brew formula / apt package
    GUI = "gui"  # brew cask / snap
    TAP = "tap"  # third-party brew tap, then native install
    SCRIPT = "script"  # named installer script


@dataclass(frozen=True)
class CommandProbe:
    """Installed when ``binary`` resolves on PATH."""

    binary: str

    def describe(self) -> str:
        return f"command -v {self.binary}"


@dataclass(frozen=True)
class PathProbe:
    """Installed when ``path`` exists. A leading ``~/`` is resolved against HOME."""

    path: str

    def resolve(self, home: Path) -> Path:
        if self.path == "~":
            return home
        if self.path.startswith("~/"):
            return home / self.path[2:]
        return Path(self.path)

    def describe(self) -> str:
        return f"test -e {self.path}"


@dataclass(frozen=True)
class ShellProbe:
    """Installed when the command exits 0."""

    argv: tuple[str, ...]

    def describe(self) -> str:
        return " ".join(self.argv)


Probe = CommandProbe | PathProbe | ShellProbe


@dataclass(frozen=True)
class PackageDescriptor:
    """Installation metadata for a single package or application."""

    key: str
    kind: PackageKind
    target: str
    probe: Probe
    display_name: str
    bootstrap: bool = False
    update_script: str | None = None
    # Probe only passes in a fresh shell session (e.g. installers that edit shell rc files)
    needs_new_shell: bool = False

    def __post_init__(self) -> None:
        if not self.key:
            raise RegistryError("Package key must not be empty")
        if not self.target:
            raise RegistryError(f"Package '{self.key}' has no install target")
        if not self.display_name:
            raise RegistryError(f"Package '{self.key}' has no display name")
        if self.kind == PackageKind.TAP and "/" not in self.target:
            raise RegistryError(
                f"Tap package '{self.key}' target must look like owner/tap/formula, got '{self.target}'"
            )

    @property
    def tap_name(self) -> str:
        """Third-party source for TAP packages: everything before the last '/'."""
        return self.target.rsplit("/", 1)[0]


@dataclass(frozen=True)
class PackageRegistry:
    """Ordered, immutable package table for one platform."""

    name: str
    packages: tuple[PackageDescriptor, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for descriptor in self.packages:
            if descriptor.key in seen:
                raise RegistryError(f"Duplicate package key '{descriptor.key}' in {self.name} registry")
            seen.add(descriptor.key)

        bootstraps = [i for i, d in enumerate(self.packages) if d.bootstrap]
        if len(bootstraps) > 1:
            raise RegistryError(f"{self.name} registry has more than one bootstrap entry")
        if bootstraps and bootstraps[0] != 0:
            raise RegistryError(
                f"Bootstrap entry '{self.packages[bootstraps[0]].key}' must be first in {self.name} registry"
            )

    def __iter__(self) -> Iterator[PackageDescriptor]:
        return iter(self.packages)

    def __len__(self) -> int:
        return len(self.packages)

    def __contains__(self, key: object) -> bool:
        return any(d.key == key for d in self.packages)

    @property
    def bootstrap(self) -> PackageDescriptor | None:
        """The package-manager entry, if this registry has one."""
        if self.packages and self.packages[0].bootstrap:
            return self.packages[0]
        return None

    @property
    def members(self) -> tuple[PackageDescriptor, ...]:
        """All entries except the bootstrap entry, in install order."""
        return tuple(d for d in self.packages if not d.bootstrap)

    def keys(self) -> list[str]:
        return [d.key for d in self.packages]

    def get(self, key: str) -> PackageDescriptor:
        for descriptor in self.packages:
            if descriptor.key == key:
                return descriptor
        raise PackageNotFoundError(f"Package not found: {key}")
