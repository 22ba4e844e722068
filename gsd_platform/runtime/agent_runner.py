# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Parallel Agent Runner — Spawn many agents, keep every result.

Each spec runs in its own task: spawn -> wait -> collect output. A task
never raises; it reports a tagged outcome instead, so one agent failing
cannot cut short its siblings. The batch is settled only after every
task has reported.

No timeout or cancellation is applied to agents. A caller that wraps this
in asyncio.wait_for() must accept that spawned processes keep running.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from gsd_platform.adapters.base import PlatformAdapter
from gsd_platform.agents.base import AgentInstance
from gsd_platform.core.errors import InvalidInputError, MultiAgentError
from gsd_platform.protocols.types import AgentSpec

logger = logging.getLogger("gsd.agent_runner")


@dataclass(frozen=True)
class AgentResult:
    """A completed agent and its output."""
    instance: AgentInstance
    output: str
    spec: Optional[AgentSpec] = None


@dataclass(frozen=True)
class AgentFailure:
    """A spec whose spawn, run or output collection failed."""
    spec: AgentSpec
    error: Exception
    instance: Optional[AgentInstance] = None


@dataclass(frozen=True)
class AgentBatchResult:
    successful: Tuple[AgentResult, ...] = field(default_factory=tuple)
    failed: Tuple[AgentFailure, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def outputs(self) -> List[str]:
        return [r.output for r in self.successful]


@dataclass
class _Outcome:
    index: int
    spec: AgentSpec
    result: Optional[AgentResult] = None
    failure: Optional[AgentFailure] = None


def _coerce_spec(index: int, spec: Union[AgentSpec, dict]) -> AgentSpec:
    if isinstance(spec, AgentSpec):
        return spec
    try:
        return AgentSpec.model_validate(spec)
    except ValidationError as exc:
        raise InvalidInputError(
            f"agent spec #{index}",
            "; ".join(e["msg"] for e in exc.errors()),
            errors=exc.errors(include_url=False, include_context=False),
        ) from exc


async def _run_one(adapter: PlatformAdapter, index: int, spec: AgentSpec) -> _Outcome:
    instance: Optional[AgentInstance] = None
    try:
        instance = await adapter.spawn_agent(spec.path, spec.args)
        await instance.wait_for_completion()
        output = await instance.get_output()
    except Exception as exc:
        logger.warning("Agent #%d (%s) failed: %s", index, spec.path, exc)
        return _Outcome(index, spec, failure=AgentFailure(spec, exc, instance))
    return _Outcome(index, spec, result=AgentResult(instance, output, spec))


async def spawn_parallel_agents(
    adapter: PlatformAdapter,
    specs: Iterable[Union[AgentSpec, dict]],
) -> AgentBatchResult:
    """
    Run all specs concurrently and collect every outcome.

    Args:
        adapter: Platform adapter used to spawn each agent
        specs: Agent specs (or dicts with "path"/"args")

    Returns:
        AgentBatchResult with every success, in spec order.

    Raises:
        InvalidInputError: if a dict spec fails validation; nothing is spawned.
        MultiAgentError: if any agent failed; carries the full result,
            including the successful agents' output.
    """
    spec_list: Sequence[AgentSpec] = [_coerce_spec(i, s) for i, s in enumerate(specs)]
    if not spec_list:
        return AgentBatchResult()

    if not adapter.supports_parallel_agents():
        logger.warning(
            "%s does not report parallel agent support; spawning %d agents anyway",
            adapter.name.value, len(spec_list),
        )

    # Tasks start in creation order, so spawns are issued in spec order
    tasks = [
        asyncio.create_task(_run_one(adapter, i, spec))
        for i, spec in enumerate(spec_list)
    ]
    outcomes: List[_Outcome] = await asyncio.gather(*tasks)

    outcomes.sort(key=lambda o: o.index)
    result = AgentBatchResult(
        successful=tuple(o.result for o in outcomes if o.result is not None),
        failed=tuple(o.failure for o in outcomes if o.failure is not None),
    )
    logger.info(
        "Agent batch settled: %d succeeded, %d failed",
        len(result.successful), len(result.failed),
    )

    if result.failed:
        raise MultiAgentError(result)
    return result
