"""Ubuntu/Debian package table (apt, snap and vendor repositories)."""

from __future__ import annotations

from devsetup.packages.models import (
    CommandProbe,
    PackageDescriptor,
    PackageKind,
    PackageRegistry,
    PathProbe,
    Probe,
    ShellProbe,
)


def _apt(key: str, display_name: str, binary: str | None = None) -> PackageDescriptor:
    return PackageDescriptor(
        key=key,
        kind=PackageKind.NATIVE,
        target=key,
        probe=CommandProbe(binary or key),
        display_name=display_name,
    )


def _snap(key: str, snap_name: str, display_name: str) -> PackageDescriptor:
    return PackageDescriptor(
        key=key,
        kind=PackageKind.GUI,
        target=snap_name,
        probe=ShellProbe(("snap", "list", snap_name)),
        display_name=display_name,
    )


def _script(key: str, display_name: str, probe: Probe, **kwargs: bool) -> PackageDescriptor:
    return PackageDescriptor(
        key=key,
        kind=PackageKind.SCRIPT,
        target=f"install_{key.replace('-', '')}",
        probe=probe,
        display_name=display_name,
        **kwargs,
    )


UBUNTU_REGISTRY = PackageRegistry(
    name="ubuntu",
    packages=(
        PackageDescriptor(
            key="apt",
            kind=PackageKind.SCRIPT,
            target="apt_update",
            probe=CommandProbe("apt-get"),
            display_name="APT",
            bootstrap=True,
            update_script="apt_update",
        ),
        PackageDescriptor(
            key="build-essential",
            kind=PackageKind.NATIVE,
            target="build-essential",
            probe=ShellProbe(("dpkg", "-s", "build-essential")),
            display_name="Build Essential",
        ),
        _apt("git", "Git"),
        _apt("curl", "cURL"),
        _apt("wget", "wget"),
        _apt("zsh", "Zsh Shell"),
        _script("oh-my-zsh", "Oh My Zsh", PathProbe("~/.oh-my-zsh")),
        _script("ollama", "Ollama", CommandProbe("ollama")),
        _script("bun", "Bun.js", CommandProbe("bun"), needs_new_shell=True),
        _script("node", "Node.js", CommandProbe("node")),
        _script("gh", "GitHub CLI", CommandProbe("gh")),
        _apt("syncthing", "Syncthing"),
        _script("docker", "Docker", CommandProbe("docker")),
        _script("vscodium", "VSCodium", CommandProbe("codium")),
        _apt("firefox", "Firefox"),
        _snap("spotify", "spotify", "Spotify"),
        _snap("signal", "signal-desktop", "Signal"),
        _snap("discord", "discord", "Discord"),
        _snap("obsidian", "obsidian", "Obsidian"),
        _apt("qbittorrent", "qBittorrent"),
        _script("eddie", "Eddie VPN", ShellProbe(("dpkg", "-s", "eddie-ui"))),
        _script("opencode", "OpenCode", CommandProbe("opencode")),
    ),
)

UBUNTU_MANUAL_STEPS: tuple[tuple[str, str], ...] = (
    ("Docker", "Log out and back in for docker group to take effect"),
    ("GitHub CLI", "Run 'gh auth login' to authenticate"),
    ("Ollama", "Run 'ollama run llama2' to download a model"),
    ("Syncthing", "Run 'sudo systemctl enable --now syncthing@{user}.service'"),
    ("Bun.js", "Restart terminal or run 'source ~/.bashrc'"),
    ("Oh My Zsh", "Run 'chsh -s {zsh}' to set as default shell"),
)
