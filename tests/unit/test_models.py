"""
Unit tests for the package data model (packages/models.py).
"""

from pathlib import Path

import pytest

from devsetup.errors import PackageNotFoundError, RegistryError
from devsetup.packages.models import (
    CommandProbe,
    PackageDescriptor,
    PackageKind,
    PackageRegistry,
    PathProbe,
    ShellProbe,
)


def _native(key: str, **kwargs) -> PackageDescriptor:
    return PackageDescriptor(
        key=key,
        kind=PackageKind.NATIVE,
        target=key,
        probe=CommandProbe(key),
        display_name=key.title(),
        **kwargs,
    )


class TestProbes:
    """Tests for probe value objects."""

    def test_path_probe_expands_home(self):
        """Test ~ paths resolve against the given home."""
        probe = PathProbe("~/.oh-my-zsh")
        assert probe.resolve(Path("/home/dev")) == Path("/home/dev/.oh-my-zsh")

    def test_path_probe_bare_tilde(self):
        assert PathProbe("~").resolve(Path("/home/dev")) == Path("/home/dev")

    def test_path_probe_absolute_path_untouched(self):
        assert PathProbe("/opt/tool").resolve(Path("/home/dev")) == Path("/opt/tool")

    def test_describe(self):
        """Test probes render as the equivalent shell check."""
        assert CommandProbe("brew").describe() == "command -v brew"
        assert ShellProbe(("brew", "list", "--cask", "firefox")).describe() == "brew list --cask firefox"
        assert "~/.oh-my-zsh" in PathProbe("~/.oh-my-zsh").describe()


class TestPackageDescriptor:
    """Tests for PackageDescriptor validation."""

    def test_empty_key_rejected(self):
        with pytest.raises(RegistryError):
            PackageDescriptor(
                key="",
                kind=PackageKind.NATIVE,
                target="git",
                probe=CommandProbe("git"),
                display_name="Git",
            )

    def test_tap_target_needs_source(self):
        """Test a TAP target must name owner/tap/formula."""
        with pytest.raises(RegistryError, match="owner/tap/formula"):
            PackageDescriptor(
                key="opencode",
                kind=PackageKind.TAP,
                target="opencode",
                probe=CommandProbe("opencode"),
                display_name="OpenCode",
            )

    def test_tap_name(self):
        descriptor = PackageDescriptor(
            key="opencode",
            kind=PackageKind.TAP,
            target="anomalyco/tap/opencode",
            probe=CommandProbe("opencode"),
            display_name="OpenCode",
        )
        assert descriptor.tap_name == "anomalyco/tap"

    def test_descriptor_is_frozen(self):
        descriptor = _native("git")
        with pytest.raises(AttributeError):
            descriptor.target = "git-lfs"


class TestPackageRegistry:
    """Tests for PackageRegistry invariants and lookups."""

    def test_preserves_order(self):
        registry = PackageRegistry(name="t", packages=(_native("b"), _native("a"), _native("c")))
        assert registry.keys() == ["b", "a", "c"]
        assert len(registry) == 3

    def test_duplicate_keys_rejected(self):
        with pytest.raises(RegistryError, match="Duplicate"):
            PackageRegistry(name="t", packages=(_native("git"), _native("git")))

    def test_bootstrap_must_be_first(self):
        with pytest.raises(RegistryError, match="must be first"):
            PackageRegistry(name="t", packages=(_native("git"), _native("brew", bootstrap=True)))

    def test_single_bootstrap(self):
        with pytest.raises(RegistryError, match="more than one"):
            PackageRegistry(
                name="t",
                packages=(_native("brew", bootstrap=True), _native("apt", bootstrap=True)),
            )

    def test_bootstrap_and_members(self, sample_registry):
        """Test members excludes the bootstrap entry."""
        assert sample_registry.bootstrap.key == "pm"
        assert [d.key for d in sample_registry.members] == ["git"]

    def test_registry_without_bootstrap(self):
        registry = PackageRegistry(name="t", packages=(_native("git"),))
        assert registry.bootstrap is None
        assert len(registry.members) == 1

    def test_get_and_contains(self, sample_registry):
        assert "git" in sample_registry
        assert "svn" not in sample_registry
        assert sample_registry.get("git").display_name == "Git"

    def test_get_missing_raises(self, sample_registry):
        with pytest.raises(PackageNotFoundError):
            sample_registry.get("svn")
