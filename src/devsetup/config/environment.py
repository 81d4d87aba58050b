"""
Host environment detection for devsetup.

This module identifies the operating system from the kernel name and
``/etc/os-release`` and collects the few environment facts the installers
need (user, home, shell, architecture).
"""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


class HostOS(str, Enum):
    """Closed set of host operating systems."""

    MACOS = "macos"
    DEBIAN = "debian"  # Ubuntu, Debian and derivatives
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class DetectedOS:
    """Result of OS detection."""

    host_os: HostOS
    name: str
    pretty_name: str = ""

    @property
    def is_supported(self) -> bool:
        return self.host_os != HostOS.UNSUPPORTED

    @property
    def label(self) -> str:
        return self.pretty_name or self.name


@dataclass(frozen=True)
class EnvironmentInfo:
    """Facts about the current user session."""

    user: str
    home: Path
    shell: str
    machine: str

    @property
    def shell_name(self) -> str:
        return Path(self.shell).name if self.shell else ""


# Linux families recognised but not supported, checked in order
KNOWN_UNSUPPORTED = ("arch", "fedora")


def parse_os_release(text: str) -> dict[str, str]:
    """
    Parse os-release ``KEY=value`` lines.

    Args:
        text: Contents of an os-release file.

    Returns:
        Mapping of keys to unquoted values.
    """
    fields: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]
        fields[key.strip()] = value
    return fields


def classify_os(kernel: str, os_release: str | None) -> DetectedOS:
    """
    Map OS identification signals to a host OS.

    Args:
        kernel: Kernel name as reported by ``uname`` (``platform.system()``).
        os_release: Contents of /etc/os-release, or None if absent.

    Returns:
        DetectedOS with exactly one HostOS value.
    """
    if kernel.lower() == "darwin":
        return DetectedOS(host_os=HostOS.MACOS, name="macos", pretty_name="macOS")

    if os_release is None:
        return DetectedOS(host_os=HostOS.UNSUPPORTED, name="unknown")

    fields = parse_os_release(os_release)
    os_id = fields.get("ID", "").lower()
    ids = {os_id, *fields.get("ID_LIKE", "").lower().split()}
    pretty_name = fields.get("PRETTY_NAME", "")

    if "ubuntu" in ids or "debian" in ids:
        return DetectedOS(host_os=HostOS.DEBIAN, name=os_id or "debian", pretty_name=pretty_name)

    for family in KNOWN_UNSUPPORTED:
        if family in ids:
            return DetectedOS(host_os=HostOS.UNSUPPORTED, name=family, pretty_name=pretty_name)

    return DetectedOS(host_os=HostOS.UNSUPPORTED, name="linux", pretty_name=pretty_name)


def detect_host_os(os_release_path: Path = Path("/etc/os-release")) -> DetectedOS:
    """Detect the host OS from the running kernel and the os-release file."""
    kernel = platform.system()
    try:
        os_release = os_release_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        os_release = None
    except OSError as e:
        logger.warning("os_release_unreadable", path=str(os_release_path), error=str(e))
        os_release = None

    detected = classify_os(kernel, os_release)
    logger.debug("host_os_detected", kernel=kernel, host_os=detected.host_os.value, name=detected.name)
    return detected


def get_environment_info(environ: Mapping[str, str] | None = None) -> EnvironmentInfo:
    """
    Get information about the current user session.

    Args:
        environ: Environment to read. Defaults to ``os.environ``.

    Returns:
        EnvironmentInfo object with session details.
    """
    env = os.environ if environ is None else environ
    home = env.get("HOME")
    return EnvironmentInfo(
        user=env.get("USER", env.get("LOGNAME", "unknown")),
        home=Path(home) if home else Path.home(),
        shell=env.get("SHELL", ""),
        machine=platform.machine(),
    )
