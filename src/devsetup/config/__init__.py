"""
devsetup configuration module.

Settings handling and host environment detection.
"""

from devsetup.config.environment import (
    DetectedOS,
    EnvironmentInfo,
    HostOS,
    classify_os,
    detect_host_os,
    get_environment_info,
    parse_os_release,
)
from devsetup.config.settings import (
    DevSetupSettings,
    InstallConfig,
    InteractiveConfig,
    OutputConfig,
)

__all__ = [
    # Settings
    "DevSetupSettings",
    "InstallConfig",
    "InteractiveConfig",
    "OutputConfig",
    # Environment
    "HostOS",
    "DetectedOS",
    "EnvironmentInfo",
    "classify_os",
    "detect_host_os",
    "get_environment_info",
    "parse_os_release",
]
