# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Platform Types — Shared vocabulary of the platform layer.

PlatformType identifies a host environment, PathSet its directories,
AgentSpec a single agent request and AgentStatus an agent's lifecycle state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator


class PlatformType(str, Enum):
    """Supported AI coding platforms."""

    CLAUDE_CODE = "claude-code"
    OPENCODE = "opencode"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional[PlatformType]:
        """Return the concrete platform named by value, or None."""
        if not value:
            return None
        value = value.strip()
        for member in (cls.CLAUDE_CODE, cls.OPENCODE):
            if member.value == value:
                return member
        return None


class AgentStatus(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not AgentStatus.RUNNING


@dataclass(frozen=True)
class PathSet:
    """Absolute platform directories, derived on demand."""

    config_dir: str
    commands_dir: str
    agents_dir: str
    hooks_dir: str


class AgentSpec(BaseModel):
    """Request to run one agent definition file."""

    path: str = Field(
        ...,
        min_length=1,
        description="Absolute path to the agent definition (a leading ~ is expanded)",
    )
    args: Dict[str, str] = Field(
        default_factory=dict,
        description="Arguments passed to the agent",
    )

    model_config = {"frozen": True}

    @field_validator("path")
    @classmethod
    def path_must_be_absolute(cls, v: str) -> str:
        expanded = os.path.expanduser(v)
        if not os.path.isabs(expanded):
            raise ValueError(f"Agent path must be absolute, got '{v}'")
        return os.path.normpath(expanded)
