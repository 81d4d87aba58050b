"""
Rich output for the devsetup CLI.

``SetupDisplay`` renders setup events as one glyph-prefixed line each and
prints the header, section rules, package table, summary and manual steps.
"""

from __future__ import annotations

from rich.box import DOUBLE
from rich.console import Console
from rich.markup import escape as rich_escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from devsetup.packages.models import PackageRegistry
from devsetup.setup.events import SetupEvents
from devsetup.setup.reporter import SetupSummary

GLYPHS = {
    "success": ("✓", "green"),
    "error": ("✗", "red"),
    "warning": ("⚠", "yellow"),
    "info": ("ℹ", "cyan"),
    "progress": ("➜", "cyan"),
}


class SetupDisplay(SetupEvents):
    """Prints setup events and reports to the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _line(self, kind: str, message: str) -> None:
        glyph, color = GLYPHS[kind]
        self.console.print(f"[{color}]{glyph}[/{color}] {rich_escape(message)}")

    def progress(self, message: str) -> None:
        self._line("progress", message)

    def success(self, message: str) -> None:
        self._line("success", message)

    def warning(self, message: str) -> None:
        self._line("warning", message)

    def error(self, message: str) -> None:
        self._line("error", message)

    def info(self, message: str) -> None:
        self._line("info", message)

    def ask(self, prompt: str) -> str:
        """Prompt for a line of input; empty answers are allowed."""
        return Prompt.ask(prompt, default="", show_default=False, console=self.console)

    def print_header(self, title: str, clear: bool = False) -> None:
        if clear:
            self.console.clear()
        self.console.print(Panel(
            Text(f"🚀 {title} Script", justify="center", style="bold cyan"),
            box=DOUBLE,
            border_style="cyan",
        ))

    def print_section(self, title: str) -> None:
        self.console.print()
        self.console.print(Rule(f"[bold blue]{rich_escape(title)}[/bold blue]", style="blue", align="left"))

    def print_summary(self, summary: SetupSummary) -> None:
        """Print per-package state and the success/failure tally."""
        self.print_section("Installation Summary")
        for status in summary.statuses:
            if status.installed:
                self.success(status.display_name)
            else:
                self.error(status.display_name)

        self.console.print()
        self.info(f"Results: {summary.installed_count} successful, {summary.failed_count} failed")

        if not summary.all_installed:
            self.console.print()
            self.warning(f"Failed installations: {' '.join(summary.failed_names)}")
            self.info("These can be manually installed later")

    def print_manual_steps(self, steps: list[tuple[str, str]]) -> None:
        self.print_section("Post-Installation Steps")
        self.info("Manual steps you may need to complete:")
        self.console.print()
        for title, text in steps:
            self.console.print(f"  [cyan]•[/cyan] {rich_escape(title)}: {rich_escape(text)}")
        self.console.print()

    def print_complete(self) -> None:
        self.console.print()
        self.success("Setup complete! 🎉")
        self.console.print()
        self.info("You may need to restart your terminal for all changes to take effect")
        self.console.print()

    def print_packages(self, registry: PackageRegistry) -> None:
        """Print the package table for a registry."""
        table = Table(title=f"Packages ({registry.name})", show_header=True)
        table.add_column("Key", style="cyan", no_wrap=True)
        table.add_column("Name")
        table.add_column("Kind", style="magenta", no_wrap=True)
        table.add_column("Target")
        table.add_column("Check", style="dim")

        for descriptor in registry:
            name = descriptor.display_name
            if descriptor.bootstrap:
                name += " [dim](bootstrap)[/dim]"
            table.add_row(
                descriptor.key,
                name,
                descriptor.kind.value,
                descriptor.target,
                rich_escape(descriptor.probe.describe()),
            )

        self.console.print(table)
