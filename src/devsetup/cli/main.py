"""
CLI interface for devsetup.

Running ``devsetup`` with no subcommand performs the full workstation setup:
- Detects the operating system and picks its platform profile
- Makes zsh the login shell
- Installs every package in the profile's registry
- Runs the interactive git, device name and avatar steps
- Re-checks every package and prints the summary and manual steps
"""

from __future__ import annotations

from typing import Annotated, Optional

import structlog
import typer
from rich.console import Console

from devsetup import __version__
from devsetup.cli.display import SetupDisplay
from devsetup.cli.logging_config import configure_cli_logging
from devsetup.config.environment import HostOS, detect_host_os, get_environment_info
from devsetup.config.settings import DevSetupSettings
from devsetup.errors import SetupError
from devsetup.setup.checker import StateProber
from devsetup.setup.installer import InstallerDispatcher
from devsetup.setup.interactive import configure_git, ensure_default_shell, rename_device, set_avatar
from devsetup.setup.orchestrator import SetupOrchestrator
from devsetup.setup.platforms import PLATFORMS, get_platform
from devsetup.setup.reporter import SetupReporter
from devsetup.setup.runner import CommandRunner
from devsetup.setup.scripts import ScriptContext

logger = structlog.get_logger(__name__)

app = typer.Typer(
    name="devsetup",
    help="devsetup - Developer workstation setup for macOS and Ubuntu/Debian",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]devsetup[/bold blue] version {__version__}")
        raise typer.Exit()


def print_setup_error(display: SetupDisplay, error: SetupError) -> None:
    """Print a fatal error and its hint."""
    display.error(str(error))
    if error.hint:
        display.info(error.hint)


def run_setup(
    settings: DevSetupSettings,
    display: SetupDisplay,
    runner: CommandRunner | None = None,
) -> None:
    """
    Run the full setup for the current host.

    Args:
        settings: Loaded configuration.
        display: Terminal output and prompts.
        runner: Command runner. Defaults to one bound to ``os.environ``.

    Raises:
        SetupError: On any fatal condition (unsupported OS, failed bootstrap,
            no usable shell).
    """
    runner = runner or CommandRunner()
    detected = detect_host_os(settings.os_release_path)
    profile = get_platform(detected)
    env = get_environment_info(runner.environ)
    use_sudo = settings.install.use_sudo

    display.print_header(profile.title, clear=settings.output.clear_screen)
    display.info(f"Detected operating system: {detected.label}")
    logger.info("setup_started", host_os=detected.host_os.value, user=env.user, machine=env.machine)

    backend = profile.create_backend(runner, use_sudo)
    prober = StateProber(runner)
    context = ScriptContext(runner=runner, events=display, use_sudo=use_sudo, machine=env.machine)
    dispatcher = InstallerDispatcher(
        backend,
        prober,
        context,
        upgrade_existing=settings.install.upgrade_existing,
    )
    dispatcher.validate(profile.registry)
    orchestrator = SetupOrchestrator(profile.registry, dispatcher, backend)

    if settings.install.change_default_shell:
        display.print_section("Default Shell")
        ensure_default_shell(runner, backend, orchestrator, display)

    display.print_section("Installing Packages")
    orchestrator.run()

    interactive = settings.interactive
    if interactive.enabled:
        if interactive.configure_git:
            display.print_section("Git Configuration")
            configure_git(runner, display.ask, display)
        if interactive.rename_device:
            display.print_section("Device Name")
            rename_device(profile.create_namer(runner, use_sudo), display.ask, display)
        if interactive.set_avatar and profile.supports_avatar:
            display.print_section("User Avatar")
            set_avatar(runner, settings.avatar_path, display, use_sudo=use_sudo)

    summary = SetupReporter(prober).summarize(profile.registry)
    display.print_summary(summary)

    zsh = runner.which("zsh") or "zsh"
    display.print_manual_steps(profile.manual_steps_for(env.user, zsh))
    display.print_complete()


@app.command()
def status() -> None:
    """
    Show which packages are installed on this machine.

    Probes every package in the current platform's list without installing
    anything.
    """
    settings = DevSetupSettings()
    display = SetupDisplay(console)

    try:
        profile = get_platform(detect_host_os(settings.os_release_path))
    except SetupError as e:
        print_setup_error(display, e)
        raise typer.Exit(1)

    summary = SetupReporter(StateProber(CommandRunner())).summarize(profile.registry)
    display.print_summary(summary)


@app.command()
def packages(
    platform: Annotated[
        Optional[HostOS],
        typer.Option(
            "--platform", "-p",
            help="Show the list for this platform instead of the detected one",
            case_sensitive=False,
        ),
    ] = None,
) -> None:
    """List the packages devsetup manages."""
    display = SetupDisplay(console)

    try:
        if platform is None:
            profile = get_platform(detect_host_os(DevSetupSettings().os_release_path))
        elif platform in PLATFORMS:
            profile = PLATFORMS[platform]
        else:
            display.error(f"No package list for platform: {platform.value}")
            raise typer.Exit(1)
    except SetupError as e:
        print_setup_error(display, e)
        raise typer.Exit(1)

    display.print_packages(profile.registry)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold blue]devsetup[/bold blue] version {__version__}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logs"),
    ] = False,
    no_prompt: Annotated[
        bool,
        typer.Option("--no-prompt", help="Skip the interactive git, device name and avatar steps"),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version", "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version",
        ),
    ] = None,
) -> None:
    """
    devsetup - Developer workstation setup

    Installs the standard toolset on macOS (Homebrew) or Ubuntu/Debian
    (apt and snap), then walks through git, device name and avatar setup.

    Run 'devsetup' with no command to start the setup.
    """
    settings = DevSetupSettings()
    configure_cli_logging(verbose=verbose, level=settings.output.log_level)

    if ctx.invoked_subcommand is not None:
        return

    if no_prompt:
        settings.interactive.enabled = False

    display = SetupDisplay(console)
    try:
        run_setup(settings, display)
    except SetupError as e:
        logger.error("setup_aborted", error=str(e), error_type=type(e).__name__)
        print_setup_error(display, e)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Setup interrupted[/yellow]")
        raise typer.Exit(130)


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
