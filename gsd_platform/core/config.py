# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
GSD Platform Configuration — Environment-driven settings.

All configuration is loaded from environment variables (or .env file).
Path overrides are read at call time through get_settings(), so a changed
environment is picked up without restarting the process.
"""

from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field


class GsdSettings(BaseSettings):
    """Installer/runtime configuration loaded from environment."""

    # --- Platform selection ---
    GSD_PLATFORM: Optional[str] = Field(
        default=None,
        description="Explicit platform override: claude-code | opencode",
    )
    GSD_PLATFORM_MARKER: Optional[str] = Field(
        default=None,
        description="Path of the one-line .platform marker written by the installer",
    )

    # --- Claude Code ---
    CLAUDE_CONFIG_DIR: Optional[str] = Field(
        default=None,
        description="Claude Code config directory (default ~/.claude)",
    )
    CLAUDE_BIN: str = Field(
        default="claude",
        description="Claude Code CLI used to run agents",
    )

    # --- OpenCode ---
    OPENCODE_CONFIG: Optional[str] = Field(
        default=None,
        description="OpenCode config FILE; its parent directory is the config dir",
    )
    XDG_CONFIG_HOME: Optional[str] = Field(
        default=None,
        description="XDG base directory used for ~/.config/opencode",
    )
    OPENCODE_BIN: str = Field(
        default="opencode",
        description="OpenCode CLI used to run agents",
    )

    # --- Agents ---
    AGENT_OUTPUT_DIR: str = Field(
        default=".planning/agents",
        description="Directory where file-based agents write their result artifact",
    )
    AGENT_POLL_INTERVAL: float = Field(
        default=0.5,
        gt=0,
        description="Seconds between artifact existence checks",
    )

    # --- Logging ---
    LOG_LEVEL: str = Field(default="INFO")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


def get_settings() -> GsdSettings:
    """Build settings from the current environment."""
    return GsdSettings()

