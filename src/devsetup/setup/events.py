"""
Progress events emitted while setting up a workstation.

Setup components report what they are doing through a ``SetupEvents``
object. The CLI renders them with rich; the base class discards them.
"""

from __future__ import annotations


class SetupEvents:
    """Receiver for user-facing progress messages. All methods are no-ops."""

    def progress(self, message: str) -> None:
        """A step is starting."""

    def success(self, message: str) -> None:
        """A step completed."""

    def warning(self, message: str) -> None:
        """Something was skipped or only partly done."""

    def error(self, message: str) -> None:
        """A step failed."""

    def info(self, message: str) -> None:
        """Neutral information."""
