"""
Installer scripts for packages that are not a single package-manager call.

Scripts are registered by name with ``@installer_script`` and referenced from
package descriptors by that name. Every script must be safe to re-run and
returns True on success.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from devsetup.errors import UnknownInstallerScriptError
from devsetup.setup.events import SetupEvents
from devsetup.setup.runner import CommandRunner

logger = structlog.get_logger(__name__)


HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
OHMYZSH_INSTALL_URL = "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"
OLLAMA_INSTALL_URL = "https://ollama.com/install.sh"
BUN_INSTALL_URL = "https://bun.sh/install"
OPENCODE_INSTALL_URL = "https://opencode.ai/install.sh"
NODESOURCE_SETUP_URL = "https://deb.nodesource.com/setup_lts.x"

APPLE_SILICON_BREW_PREFIX = "/opt/homebrew"
BREW_SHELLENV_LINE = f'eval "$({APPLE_SILICON_BREW_PREFIX}/bin/brew shellenv)"'


@dataclass
class ScriptContext:
    """Everything an installer script may use."""

    runner: CommandRunner
    events: SetupEvents = field(default_factory=SetupEvents)
    use_sudo: bool = True
    machine: str = ""

    @property
    def home(self) -> Path:
        home = self.runner.environ.get("HOME")
        return Path(home) if home else Path.home()

    @property
    def user(self) -> str:
        return self.runner.environ.get("USER", "")

    @property
    def sudo(self) -> str:
        """Prefix for shell snippets that need root."""
        return "sudo " if self.use_sudo else ""

    def run_steps(self, steps: Sequence[str]) -> bool:
        """Run shell snippets in order, stopping at the first failure."""
        for step in steps:
            if self.runner.shell(step) != 0:
                logger.warning("installer_step_failed", step=step)
                return False
        return True


InstallerScript = Callable[[ScriptContext], bool]

_SCRIPTS: dict[str, InstallerScript] = {}


def installer_script(name: str) -> Callable[[InstallerScript], InstallerScript]:
    """
    Register a function as an installer script.

    Usage:
        @installer_script("install_thing")
        def install_thing(ctx: ScriptContext) -> bool:
            return ctx.runner.shell("curl -fsSL https://example.com/i.sh | sh") == 0
    """

    def decorator(func: InstallerScript) -> InstallerScript:
        if name in _SCRIPTS:
            raise ValueError(f"Installer script '{name}' is already registered")
        _SCRIPTS[name] = func
        return func

    return decorator


def get_script(name: str) -> InstallerScript:
    """Look up a registered installer script by name."""
    try:
        return _SCRIPTS[name]
    except KeyError:
        raise UnknownInstallerScriptError(f"Unknown installer script: {name}") from None


def has_script(name: str) -> bool:
    return name in _SCRIPTS


def script_names() -> list[str]:
    return sorted(_SCRIPTS)


# ---------------------------------------------------------------------------
# macOS
# ---------------------------------------------------------------------------


@installer_script("install_homebrew")
def install_homebrew(ctx: ScriptContext) -> bool:
    if ctx.runner.which("brew"):
        ctx.events.warning("Homebrew already installed, updating...")
        return ctx.runner.run(["brew", "update"]) == 0

    if ctx.runner.shell(f'/bin/bash -c "$(curl -fsSL {HOMEBREW_INSTALL_URL})"') != 0:
        return False

    if ctx.machine == "arm64":
        _add_brew_shellenv(ctx)
    return True


def _add_brew_shellenv(ctx: ScriptContext) -> None:
    """Put Apple Silicon Homebrew on PATH now and for future login shells."""
    zprofile = ctx.home / ".zprofile"
    existing = zprofile.read_text(encoding="utf-8") if zprofile.exists() else ""
    if BREW_SHELLENV_LINE not in existing:
        with zprofile.open("a", encoding="utf-8") as f:
            if existing and not existing.endswith("\n"):
                f.write("\n")
            f.write(BREW_SHELLENV_LINE + "\n")
        logger.info("brew_shellenv_added", path=str(zprofile))

    ctx.runner.prepend_path(f"{APPLE_SILICON_BREW_PREFIX}/bin", f"{APPLE_SILICON_BREW_PREFIX}/sbin")


@installer_script("update_homebrew")
def update_homebrew(ctx: ScriptContext) -> bool:
    return ctx.runner.run(["brew", "update"], quiet=True) == 0


# ---------------------------------------------------------------------------
# Shared vendor installers
# ---------------------------------------------------------------------------


@installer_script("install_ohmyzsh")
def install_ohmyzsh(ctx: ScriptContext) -> bool:
    if (ctx.home / ".oh-my-zsh").is_dir():
        ctx.events.warning("Oh My Zsh already installed")
        return True
    return ctx.runner.shell(f'sh -c "$(curl -fsSL {OHMYZSH_INSTALL_URL})" "" --unattended') == 0


@installer_script("install_ollama")
def install_ollama(ctx: ScriptContext) -> bool:
    return ctx.runner.shell(f"curl -fsSL {OLLAMA_INSTALL_URL} | sh") == 0


@installer_script("install_bun")
def install_bun(ctx: ScriptContext) -> bool:
    return ctx.runner.shell(f"curl -fsSL {BUN_INSTALL_URL} | bash") == 0


@installer_script("install_opencode")
def install_opencode(ctx: ScriptContext) -> bool:
    return ctx.runner.shell(f"curl -fsSL {OPENCODE_INSTALL_URL} | sh") == 0


# ---------------------------------------------------------------------------
# Ubuntu / Debian
# ---------------------------------------------------------------------------


@installer_script("apt_update")
def apt_update(ctx: ScriptContext) -> bool:
    ctx.events.progress("Updating package lists...")
    return ctx.runner.shell(f"{ctx.sudo}apt-get update") == 0


@installer_script("install_node")
def install_node(ctx: ScriptContext) -> bool:
    sudo = ctx.sudo
    return ctx.run_steps([
        f"curl -fsSL {NODESOURCE_SETUP_URL} | {sudo}{'-E ' if sudo else ''}bash -",
        f"{sudo}apt-get install -y nodejs",
    ])


@installer_script("install_gh")
def install_gh(ctx: ScriptContext) -> bool:
    sudo = ctx.sudo
    keyring = "/usr/share/keyrings/githubcli-archive-keyring.gpg"
    return ctx.run_steps([
        f"type -p curl >/dev/null || {sudo}apt-get install -y curl",
        f"curl -fsSL https://cli.github.com/packages/githubcli-archive-keyring.gpg | {sudo}dd of={keyring}",
        f"{sudo}chmod go+r {keyring}",
        (
            f'echo "deb [arch=$(dpkg --print-architecture) signed-by={keyring}] '
            f'https://cli.github.com/packages stable main" '
            f"| {sudo}tee /etc/apt/sources.list.d/github-cli.list > /dev/null"
        ),
        f"{sudo}apt-get update",
        f"{sudo}apt-get install -y gh",
    ])


@installer_script("install_docker")
def install_docker(ctx: ScriptContext) -> bool:
    sudo = ctx.sudo
    keyring = "/etc/apt/keyrings/docker.asc"
    installed = ctx.run_steps([
        f"{sudo}apt-get update",
        f"{sudo}apt-get install -y ca-certificates curl",
        f"{sudo}install -m 0755 -d /etc/apt/keyrings",
        f"{sudo}curl -fsSL https://download.docker.com/linux/ubuntu/gpg -o {keyring}",
        f"{sudo}chmod a+r {keyring}",
        (
            f'echo "deb [arch=$(dpkg --print-architecture) signed-by={keyring}] '
            f'https://download.docker.com/linux/ubuntu $(. /etc/os-release && echo "$VERSION_CODENAME") stable" '
            f"| {sudo}tee /etc/apt/sources.list.d/docker.list > /dev/null"
        ),
        f"{sudo}apt-get update",
        (
            f"{sudo}apt-get install -y docker-ce docker-ce-cli containerd.io "
            "docker-buildx-plugin docker-compose-plugin"
        ),
    ])
    if not installed:
        return False

    user = ctx.user
    if user and ctx.runner.shell(f"{sudo}usermod -aG docker {user}") != 0:
        ctx.events.warning(f"Could not add {user} to the docker group")
    return True


@installer_script("install_vscodium")
def install_vscodium(ctx: ScriptContext) -> bool:
    sudo = ctx.sudo
    keyring = "/usr/share/keyrings/vscodium-archive-keyring.gpg"
    return ctx.run_steps([
        (
            "wget -qO - https://gitlab.com/paulcarroty/vscodium-deb-rpm-repo/raw/master/pub.gpg "
            f"| gpg --dearmor | {sudo}dd of={keyring}"
        ),
        (
            f"echo 'deb [ signed-by={keyring} ] https://download.vscodium.com/debs vscodium main' "
            f"| {sudo}tee /etc/apt/sources.list.d/vscodium.list"
        ),
        f"{sudo}apt-get update",
        f"{sudo}apt-get install -y codium",
    ])


@installer_script("install_eddie")
def install_eddie(ctx: ScriptContext) -> bool:
    sudo = ctx.sudo
    keyring = "/usr/share/keyrings/eddie.website-keyring.asc"
    ctx.events.progress("Setting up Eddie VPN repository...")
    return ctx.run_steps([
        (
            "curl -fsSL https://eddie.website/repository/keys/eddie_maintainer_gpg.key "
            f"| {sudo}tee {keyring} > /dev/null"
        ),
        (
            f'echo "deb [signed-by={keyring}] http://eddie.website/repository/apt stable main" '
            f"| {sudo}tee /etc/apt/sources.list.d/eddie.website.list"
        ),
        f"{sudo}apt-get update",
        f"{sudo}apt-get install -y eddie-ui",
    ])
