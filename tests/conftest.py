"""
Pytest fixtures and configuration for the devsetup test suite.

No test ever runs a real package manager: every component is driven through
``FakeRunner``, which records commands and answers them from a script.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from devsetup.packages.models import CommandProbe, PackageDescriptor, PackageKind, PackageRegistry
from devsetup.setup.backends import HomebrewBackend
from devsetup.setup.checker import StateProber
from devsetup.setup.events import SetupEvents
from devsetup.setup.installer import InstallerDispatcher
from devsetup.setup.orchestrator import SetupOrchestrator
from devsetup.setup.runner import CommandRunner
from devsetup.setup.scripts import _SCRIPTS, ScriptContext

# ============================================================================
# Fakes
# ============================================================================


class FakeRunner(CommandRunner):
    """
    Scripted command runner.

    - ``installed``: binaries that ``which`` resolves.
    - ``fail(pattern)``: commands whose text contains ``pattern`` exit 1.
    - ``on(pattern, installs=...)``: a successful matching command puts a
      binary on PATH.
    - ``outputs``: stdout returned by ``capture`` keyed by the command text.
    """

    def __init__(self, installed: Sequence[str] = (), environ: dict[str, str] | None = None) -> None:
        super().__init__(environ={
            "HOME": "/home/dev",
            "USER": "dev",
            "SHELL": "/bin/zsh",
            "PATH": "/usr/bin:/bin",
            **(environ or {}),
        })
        self.installed: set[str] = set(installed)
        self.failing: list[str] = []
        self.effects: list[tuple[str, Callable[[FakeRunner], None]]] = []
        self.outputs: dict[str, str] = {}
        self.calls: list[str] = []

    def fail(self, pattern: str) -> FakeRunner:
        self.failing.append(pattern)
        return self

    def on(self, pattern: str, installs: str) -> FakeRunner:
        self.effects.append((pattern, lambda r: r.installed.add(installs)))
        return self

    def ran(self, pattern: str) -> bool:
        """True if any recorded command contains ``pattern``."""
        return any(pattern in call for call in self.calls)

    def run(self, args: Sequence[str], quiet: bool = False) -> int:
        command = " ".join(args)
        self.calls.append(command)
        if any(pattern in command for pattern in self.failing):
            return 1
        for pattern, effect in self.effects:
            if pattern in command:
                effect(self)
        return 0

    def capture(self, args: Sequence[str]) -> str | None:
        command = " ".join(args)
        self.calls.append(command)
        return self.outputs.get(command)

    def which(self, binary: str) -> str | None:
        return f"/usr/bin/{binary}" if binary in self.installed else None


class RecordingEvents(SetupEvents):
    """Collects (kind, message) pairs."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def progress(self, message: str) -> None:
        self.messages.append(("progress", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def of(self, kind: str) -> list[str]:
        return [m for k, m in self.messages if k == kind]


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def runner() -> FakeRunner:
    """Fake runner with nothing installed."""
    return FakeRunner()


@pytest.fixture
def make_runner() -> type[FakeRunner]:
    """The FakeRunner class, for tests that need a custom starting state."""
    return FakeRunner


@pytest.fixture
def events() -> RecordingEvents:
    return RecordingEvents()


@pytest.fixture
def pm_script(monkeypatch):
    """Register an ``install_pm`` script that shells out to ``install-pm``."""

    def install_pm(ctx: ScriptContext) -> bool:
        return ctx.runner.shell("install-pm") == 0

    monkeypatch.setitem(_SCRIPTS, "install_pm", install_pm)
    return install_pm


@pytest.fixture
def pm_descriptor() -> PackageDescriptor:
    return PackageDescriptor(
        key="pm",
        kind=PackageKind.SCRIPT,
        target="install_pm",
        probe=CommandProbe("brew"),
        display_name="Package Manager",
        bootstrap=True,
    )


@pytest.fixture
def git_descriptor() -> PackageDescriptor:
    return PackageDescriptor(
        key="git",
        kind=PackageKind.NATIVE,
        target="git",
        probe=CommandProbe("git"),
        display_name="Git",
    )


@pytest.fixture
def sample_registry(pm_descriptor, git_descriptor) -> PackageRegistry:
    """``[pm (SCRIPT, bootstrap), git (NATIVE)]``."""
    return PackageRegistry(name="sample", packages=(pm_descriptor, git_descriptor))


@pytest.fixture
def make_stack(events):
    """Build backend, prober, dispatcher and orchestrator around a runner."""

    def _make(runner: FakeRunner, registry: PackageRegistry, upgrade_existing: bool = True):
        backend = HomebrewBackend(runner)
        prober = StateProber(runner)
        context = ScriptContext(runner=runner, events=events)
        dispatcher = InstallerDispatcher(backend, prober, context, upgrade_existing=upgrade_existing)
        orchestrator = SetupOrchestrator(registry, dispatcher, backend)
        return backend, prober, dispatcher, orchestrator

    return _make
