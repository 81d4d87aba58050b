"""
devsetup configuration settings using Pydantic.

Settings are read from environment variables with the ``DEVSETUP_`` prefix or
from a ``.env`` file in the current directory. Nested values use ``__``, for
example ``DEVSETUP_INSTALL__USE_SUDO=false``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class InstallConfig(BaseModel):
    """Package installation behaviour."""

    use_sudo: bool = Field(
        default=True,
        description="Prefix apt, snap and system commands with sudo",
    )
    upgrade_existing: bool = Field(
        default=True,
        description="Best-effort upgrade of packages that are already installed (the package index is refreshed regardless)",
    )
    change_default_shell: bool = Field(
        default=True,
        description="Install zsh if missing and make it the login shell",
    )


class InteractiveConfig(BaseModel):
    """Interactive post-install steps."""

    enabled: bool = Field(
        default=True,
        description="Run interactive prompts (disable for unattended runs)",
    )
    configure_git: bool = Field(
        default=True,
        description="Ask for the global git user name and email",
    )
    rename_device: bool = Field(
        default=True,
        description="Offer to rename the machine",
    )
    set_avatar: bool = Field(
        default=True,
        description="Install the user avatar (Ubuntu only)",
    )


class OutputConfig(BaseModel):
    """Terminal output configuration."""

    clear_screen: bool = Field(
        default=True,
        description="Clear the terminal before the setup header",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level when --verbose is not given",
    )


class DevSetupSettings(BaseSettings):
    """
    Main devsetup configuration.

    Settings are loaded from environment variables with the DEVSETUP_ prefix,
    or from a .env file in the current directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEVSETUP_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    os_release_path: Path = Field(
        default=Path("/etc/os-release"),
        description="OS identification file read on Linux",
    )
    avatar_path: Path = Field(
        default=Path("assets/avatars/avatar.jpeg"),
        description="Avatar image installed by the Ubuntu avatar step",
    )

    install: InstallConfig = Field(default_factory=InstallConfig)
    interactive: InteractiveConfig = Field(default_factory=InteractiveConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
