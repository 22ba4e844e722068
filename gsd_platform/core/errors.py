# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Platform Error Taxonomy — Unified error structure.

Every adapter, agent and runner failure is one of these. Nothing in the
platform layer returns an empty/default value to mask a real failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from gsd_platform.runtime.agent_runner import AgentBatchResult


class PlatformError(Exception):
    """Base platform error with a machine-readable code."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(PlatformError):
    def __init__(self, kind: str, path: str):
        super().__init__(
            code="NOT_FOUND",
            message=f"{kind} not found: {path}",
            details={"kind": kind, "path": path},
        )
        self.path = path


class MalformedConfigError(PlatformError):
    def __init__(self, path: str, reason: str):
        super().__init__(
            code="MALFORMED_CONFIG",
            message=f"Cannot parse config file {path}: {reason}",
            details={"path": path, "reason": reason},
        )
        self.path = path


class InvalidInputError(PlatformError):
    """A caller-supplied name or spec was rejected before touching anything."""

    def __init__(self, subject: str, reason: str, errors: Optional[list] = None):
        super().__init__(
            code="INVALID_INPUT",
            message=f"Invalid {subject}: {reason}",
            details={"subject": subject, "errors": errors or []},
        )


class UnsupportedError(PlatformError):
    def __init__(self, platform: str, operation: str):
        super().__init__(
            code="UNSUPPORTED",
            message=f"{operation} is not supported on {platform}",
            details={"platform": platform, "operation": operation},
        )


class CollisionError(PlatformError):
    def __init__(self, name: str, existing_path: str):
        super().__init__(
            code="COLLISION",
            message=(
                f"Command '{name}' already exists at {existing_path} "
                f"with different content; refusing to overwrite"
            ),
            details={"name": name, "existing_path": existing_path},
        )
        self.name = name


class SpawnFailureError(PlatformError):
    def __init__(self, agent_path: str, reason: str):
        super().__init__(
            code="SPAWN_FAILURE",
            message=f"Failed to spawn agent {agent_path}: {reason}",
            details={"agent_path": agent_path, "reason": reason},
        )


class AgentFailedError(PlatformError):
    """An agent was spawned but finished in the failed state."""

    def __init__(
        self,
        agent_id: str,
        reason: str,
        exit_code: Optional[int] = None,
        signal_name: Optional[str] = None,
        stderr: str = "",
    ):
        message = f"Agent {agent_id} {reason}"
        if stderr:
            message = f"{message}\n{stderr.rstrip()}"
        super().__init__(
            code="AGENT_FAILED",
            message=message,
            details={
                "agent_id": agent_id,
                "exit_code": exit_code,
                "signal": signal_name,
            },
        )
        self.agent_id = agent_id
        self.exit_code = exit_code
        self.signal_name = signal_name
        self.stderr = stderr


class AgentStateError(PlatformError):
    """Usage error: an operation was called in the wrong lifecycle state."""

    def __init__(self, agent_id: str, message: str):
        super().__init__(
            code="AGENT_STATE",
            message=message,
            details={"agent_id": agent_id},
        )


class PlatformDetectionError(PlatformError):
    def __init__(self):
        super().__init__(
            code="PLATFORM_UNDETECTED",
            message=(
                "No supported AI platform detected. "
                "Install Claude Code or OpenCode, or set the GSD_PLATFORM "
                "environment variable (GSD_PLATFORM=claude-code or "
                "GSD_PLATFORM=opencode)."
            ),
        )


class MultiAgentError(PlatformError):
    """One or more agents in a batch failed; carries the partial result."""

    def __init__(self, result: "AgentBatchResult"):
        total = len(result.successful) + len(result.failed)
        super().__init__(
            code="MULTI_AGENT_FAILURE",
            message=f"{len(result.failed)}/{total} agents failed",
            details={
                "succeeded": len(result.successful),
                "failed": len(result.failed),
            },
        )
        self.result = result

    @property
    def successful(self):
        return self.result.successful

    @property
    def failed(self):
        return self.result.failed
