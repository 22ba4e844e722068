# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
AgentInstance — Lifecycle handle for one spawned agent.

State machine:  RUNNING -> COMPLETED | FAILED, exactly once.

Each implementation supplies a monitor coroutine that watches its
execution mechanism and settles the instance. The monitor runs as a
background task started at spawn time; waiters never cancel it.
"""

from __future__ import annotations

import asyncio
import logging
import signal
from abc import ABC, abstractmethod
from typing import Optional

from gsd_platform.core.errors import AgentFailedError, AgentStateError
from gsd_platform.protocols.types import AgentStatus

logger = logging.getLogger("gsd.agent")


def signal_name(signum: int) -> str:
    try:
        return signal.Signals(signum).name
    except ValueError:
        return f"signal {signum}"


def exit_failure(
    agent_id: str,
    code: int,
    stderr: str = "",
    subject: str = "",
) -> AgentFailedError:
    """
    Describe a non-zero exit status.

    Negative codes are POSIX signal deaths and carry the signal name.
    subject prefixes the reason, e.g. "host process".
    """
    prefix = f"{subject} " if subject else ""
    if code < 0:
        name = signal_name(-code)
        return AgentFailedError(
            agent_id,
            f"{prefix}terminated by signal {name}",
            exit_code=code,
            signal_name=name,
            stderr=stderr,
        )
    return AgentFailedError(
        agent_id,
        f"{prefix}failed with exit code {code}",
        exit_code=code,
        stderr=stderr,
    )


class AgentInstance(ABC):
    """
    Abstract base class for agent handles.

    Subclasses implement _monitor() and _read_output(), and call
    _start_monitor() once their mechanism is attached.
    """

    def __init__(self, agent_id: str) -> None:
        self._id = agent_id
        self._status = AgentStatus.RUNNING
        self._error: Optional[AgentFailedError] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def id(self) -> str:
        return self._id

    @property
    def status(self) -> AgentStatus:
        return self._status

    @property
    def error(self) -> Optional[AgentFailedError]:
        """Failure detail once FAILED, else None."""
        return self._error

    # ── Lifecycle ───────────────────────────────────────────────

    def _start_monitor(self) -> None:
        self._task = asyncio.create_task(self._run_monitor())

    async def _run_monitor(self) -> None:
        try:
            await self._monitor()
        except Exception as exc:
            self._fail(AgentFailedError(self._id, f"monitoring failed: {exc}"))
            return
        if self._status is AgentStatus.RUNNING:
            self._fail(AgentFailedError(self._id, "ended without reporting completion"))

    def _complete(self) -> None:
        if self._status.is_terminal:
            return
        self._status = AgentStatus.COMPLETED
        logger.info("Agent %s completed", self._id, extra={"agent_id": self._id})

    def _fail(self, error: AgentFailedError) -> None:
        if self._status.is_terminal:
            return
        self._status = AgentStatus.FAILED
        self._error = error
        logger.warning(
            "Agent %s failed: %s", self._id, error.message,
            extra={"agent_id": self._id},
        )

    @abstractmethod
    async def _monitor(self) -> None:
        """Watch the execution mechanism and call _complete() or _fail()."""
        ...

    @abstractmethod
    async def _read_output(self) -> str:
        ...

    # ── Public contract ─────────────────────────────────────────

    async def wait_for_completion(self) -> None:
        """
        Suspend until the agent reaches a terminal state.

        Returns normally on COMPLETED, raises AgentFailedError on FAILED.
        Cancelling the caller does not cancel the agent.
        """
        if self._task is not None and not self._status.is_terminal:
            await asyncio.shield(self._task)
        if self._status is AgentStatus.FAILED:
            raise self._error

    async def get_output(self) -> str:
        """Return the agent's output. Only valid after a terminal state."""
        if not self._status.is_terminal:
            raise AgentStateError(
                self._id,
                f"Cannot get output while agent {self._id} is still running",
            )
        return await self._read_output()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id!r}, status={self._status.value})"
