# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Artifact Agent — Agent whose result is a file it writes (Claude Code).

The agent is told where to write its result. The instance completes when
that artifact appears, or when the hosting process reports it is done,
whichever comes first. A completed agent that left no artifact has
empty output. Agents should create the artifact atomically (write then
rename) since its appearance alone marks completion.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Tuple

import aiofiles
import aiofiles.os

from gsd_platform.agents.base import AgentInstance, exit_failure

logger = logging.getLogger("gsd.agent.artifact")


class ArtifactAgentInstance(AgentInstance):
    """
    Watches for an output artifact, optionally alongside a host process.

    Args:
        agent_id: Unique agent identifier
        output_path: File the agent writes its result to
        process: Hosting process, if the agent runs in one
        poll_interval: Seconds between artifact checks
    """

    def __init__(
        self,
        agent_id: str,
        output_path: str,
        process: Optional[asyncio.subprocess.Process] = None,
        poll_interval: float = 0.5,
    ) -> None:
        super().__init__(agent_id)
        self._output_path = output_path
        self._process = process
        self._poll_interval = poll_interval
        self._host_task: Optional[asyncio.Task] = None
        self._start_monitor()

    @property
    def output_path(self) -> str:
        return self._output_path

    async def _wait_for_artifact(self) -> None:
        while not await aiofiles.os.path.exists(self._output_path):
            await asyncio.sleep(self._poll_interval)

    async def _wait_for_host(self) -> Tuple[int, str]:
        _, stderr = await self._process.communicate()
        text = (stderr or b"").decode("utf-8", errors="replace")
        return self._process.returncode, text

    def _on_host_exit(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.debug("Host process monitor for %s ended with %s", self.id, exc)

    async def _monitor(self) -> None:
        artifact_task = asyncio.create_task(self._wait_for_artifact())
        if self._process is None:
            await artifact_task
            self._complete()
            return

        self._host_task = asyncio.create_task(self._wait_for_host())
        # The host keeps draining its pipe after the artifact wins
        self._host_task.add_done_callback(self._on_host_exit)

        await asyncio.wait(
            {artifact_task, self._host_task},
            return_when=asyncio.FIRST_COMPLETED,
        )

        if artifact_task.done():
            self._complete()
            return

        artifact_task.cancel()
        code, stderr = self._host_task.result()
        if code == 0:
            self._complete()
        else:
            self._fail(exit_failure(self.id, code, stderr, subject="host process"))

    async def _read_output(self) -> str:
        if not await aiofiles.os.path.exists(self._output_path):
            return ""
        async with aiofiles.open(self._output_path, "r", encoding="utf-8") as f:
            return await f.read()
