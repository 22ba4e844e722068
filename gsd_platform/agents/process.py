# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Process Agent — Agent running as a child CLI process (OpenCode).

Completion is the point where stdout and stderr have both reached EOF
and the exit status has been collected, so no output is lost to a
process that exits before its pipes are flushed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from gsd_platform.agents.base import AgentInstance, exit_failure
from gsd_platform.core.errors import AgentFailedError

logger = logging.getLogger("gsd.agent.process")

_READ_CHUNK = 64 * 1024


class ProcessAgentInstance(AgentInstance):
    """Tracks an asyncio subprocess; exit code 0 means COMPLETED."""

    def __init__(self, agent_id: str, process: asyncio.subprocess.Process) -> None:
        super().__init__(agent_id)
        self._process = process
        self._stdout: List[bytes] = []
        self._stderr: List[bytes] = []
        self._start_monitor()

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid

    @property
    def returncode(self) -> Optional[int]:
        return self._process.returncode

    @property
    def stdout(self) -> str:
        return b"".join(self._stdout).decode("utf-8", errors="replace")

    @property
    def stderr(self) -> str:
        """Collected stderr, for diagnostics."""
        return b"".join(self._stderr).decode("utf-8", errors="replace")

    @staticmethod
    async def _drain(stream: Optional[asyncio.StreamReader], sink: List[bytes]) -> None:
        if stream is None:
            return
        while True:
            chunk = await stream.read(_READ_CHUNK)
            if not chunk:
                break
            sink.append(chunk)

    async def _monitor(self) -> None:
        try:
            await asyncio.gather(
                self._drain(self._process.stdout, self._stdout),
                self._drain(self._process.stderr, self._stderr),
            )
            code = await self._process.wait()
        except OSError as exc:
            self._fail(AgentFailedError(self.id, f"process error: {exc}", stderr=self.stderr))
            return

        if code == 0:
            self._complete()
        else:
            self._fail(exit_failure(self.id, code, self.stderr))

    async def _read_output(self) -> str:
        return self.stdout
