"""macOS package table (Homebrew)."""

from __future__ import annotations

from devsetup.packages.models import (
    CommandProbe,
    PackageDescriptor,
    PackageKind,
    PackageRegistry,
    PathProbe,
    ShellProbe,
)


def _cask(key: str, display_name: str) -> PackageDescriptor:
    return PackageDescriptor(
        key=key,
        kind=PackageKind.GUI,
        target=key,
        probe=ShellProbe(("brew", "list", "--cask", key)),
        display_name=display_name,
    )


MACOS_REGISTRY = PackageRegistry(
    name="macos",
    packages=(
        PackageDescriptor(
            key="homebrew",
            kind=PackageKind.SCRIPT,
            target="install_homebrew",
            probe=CommandProbe("brew"),
            display_name="Homebrew",
            bootstrap=True,
            update_script="update_homebrew",
        ),
        PackageDescriptor(
            key="oh-my-zsh",
            kind=PackageKind.SCRIPT,
            target="install_ohmyzsh",
            probe=PathProbe("~/.oh-my-zsh"),
            display_name="Oh My Zsh",
        ),
        PackageDescriptor(
            key="ollama",
            kind=PackageKind.SCRIPT,
            target="install_ollama",
            probe=CommandProbe("ollama"),
            display_name="Ollama",
        ),
        PackageDescriptor(
            key="bun",
            kind=PackageKind.SCRIPT,
            target="install_bun",
            probe=CommandProbe("bun"),
            display_name="Bun.js",
            needs_new_shell=True,
        ),
        PackageDescriptor(
            key="gh",
            kind=PackageKind.NATIVE,
            target="gh",
            probe=CommandProbe("gh"),
            display_name="GitHub CLI",
        ),
        PackageDescriptor(
            key="syncthing",
            kind=PackageKind.NATIVE,
            target="syncthing",
            probe=CommandProbe("syncthing"),
            display_name="Syncthing",
        ),
        _cask("docker", "Docker Desktop"),
        _cask("vscodium", "VSCodium"),
        _cask("firefox", "Firefox"),
        _cask("spotify", "Spotify"),
        _cask("signal", "Signal"),
        _cask("discord", "Discord"),
        _cask("ghostty", "Ghostty"),
        _cask("raycast", "Raycast"),
        _cask("obsidian", "Obsidian"),
        _cask("qbittorrent", "qBittorrent"),
        _cask("eddie", "Eddie"),
        PackageDescriptor(
            key="opencode",
            kind=PackageKind.TAP,
            target="anomalyco/tap/opencode",
            probe=CommandProbe("opencode"),
            display_name="OpenCode",
        ),
    ),
)

MACOS_MANUAL_STEPS: tuple[tuple[str, str], ...] = (
    ("Docker", "Launch Docker Desktop from Applications"),
    ("GitHub CLI", "Run 'gh auth login' to authenticate"),
    ("Ollama", "Run 'ollama run llama2' to download a model"),
    ("Syncthing", "Run 'brew services start syncthing'"),
    ("Bun.js", "Restart terminal or run 'source ~/.zshrc'"),
)
