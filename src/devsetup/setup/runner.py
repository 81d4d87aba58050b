"""
Blocking external command execution.

Every install and probe step is a subprocess call that runs to completion.
There are no timeouts: installers can prompt for passwords or take a long
time, and the run is supervised by the person at the terminal.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import MutableMapping, Sequence

import structlog

logger = structlog.get_logger(__name__)

# Exit code reported when the executable does not exist
COMMAND_NOT_FOUND = 127


class CommandRunner:
    """
    Runs external commands and resolves binaries on PATH.

    The runner owns the environment used for child processes and PATH lookups,
    so installers that extend PATH (Homebrew on Apple Silicon) make the new
    binaries visible to later probes in the same run.
    """

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        """
        Initialize the runner.

        Args:
            environ: Environment for child processes. Defaults to ``os.environ``.
        """
        self.environ = os.environ if environ is None else environ

    def run(self, args: Sequence[str], quiet: bool = False) -> int:
        """
        Run a command and return its exit code.

        Args:
            args: Program and arguments.
            quiet: Discard stdout and stderr instead of passing them through.

        Returns:
            Exit code, or 127 if the program could not be started.
        """
        logger.debug("command_run", command=" ".join(args))
        output = subprocess.DEVNULL if quiet else None
        try:
            result = subprocess.run(
                list(args),
                stdout=output,
                stderr=output,
                env=dict(self.environ),
                check=False,
            )
        except FileNotFoundError:
            logger.debug("command_not_found", command=args[0] if args else "")
            return COMMAND_NOT_FOUND
        except OSError as e:
            logger.warning("command_failed_to_start", command=" ".join(args), error=str(e))
            return COMMAND_NOT_FOUND

        if result.returncode != 0:
            logger.debug("command_nonzero_exit", command=" ".join(args), returncode=result.returncode)
        return result.returncode

    def shell(self, script: str, quiet: bool = False) -> int:
        """Run a bash snippet (pipes, command substitution) and return its exit code."""
        return self.run(["/bin/bash", "-c", script], quiet=quiet)

    def succeeds(self, args: Sequence[str]) -> bool:
        """Run a command silently; True if it exits 0."""
        return self.run(args, quiet=True) == 0

    def capture(self, args: Sequence[str]) -> str | None:
        """
        Run a command and return its stripped stdout.

        Returns:
            Output text, or None if the command failed or could not start.
        """
        try:
            result = subprocess.run(
                list(args),
                capture_output=True,
                text=True,
                env=dict(self.environ),
                check=False,
            )
        except OSError:
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip()

    def which(self, binary: str) -> str | None:
        """Resolve a binary on this runner's PATH."""
        return shutil.which(binary, path=self.environ.get("PATH"))

    def prepend_path(self, *directories: str) -> None:
        """Put directories at the front of PATH for this run and its children."""
        current = [p for p in self.environ.get("PATH", "").split(os.pathsep) if p]
        new = [d for d in directories if d not in current]
        self.environ["PATH"] = os.pathsep.join([*new, *current])
