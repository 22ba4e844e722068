# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Shared test fixtures for all GSD platform tests.
"""

import asyncio
import shlex
import sys
import textwrap
from pathlib import Path
from typing import Callable, List, Optional

import pytest

from gsd_platform.agents.base import AgentInstance
from gsd_platform.core.config import GsdSettings
from gsd_platform.kernel.registry import default_registry
from gsd_platform.protocols.types import PlatformType

_ENV_VARS = (
    "GSD_PLATFORM",
    "GSD_PLATFORM_MARKER",
    "CLAUDE_CONFIG_DIR",
    "CLAUDE_BIN",
    "OPENCODE_CONFIG",
    "OPENCODE_BIN",
    "XDG_CONFIG_HOME",
    "AGENT_OUTPUT_DIR",
    "AGENT_POLL_INTERVAL",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Fresh HOME, cwd and platform env for every test."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(home))
    # Keep the repo's own .platform marker out of detection
    monkeypatch.setenv("GSD_PLATFORM_MARKER", str(tmp_path / "no-marker" / ".platform"))
    monkeypatch.chdir(work)
    default_registry.reset()
    yield home
    default_registry.reset()


@pytest.fixture
def home(isolated_env) -> Path:
    return isolated_env


# ── Fake platform CLI ────────────────────────────────────────

FAKE_CLI = textwrap.dedent('''
    import os, re, signal, sys, time

    args = sys.argv[1:]
    if args[:1] == ["run"]:
        # opencode run --agent <name> <prompt>
        name, prompt = args[2], args[3]
        if "sleepy" in name:
            time.sleep(0.3)
        if "crash" in name:
            sys.stderr.write("boom: " + name + "\\n")
            sys.exit(3)
        if "killed" in name:
            os.kill(os.getpid(), signal.SIGTERM)
        sys.stdout.write("agent " + name + " done\\n")
        sys.stdout.write(prompt + "\\n")
        sys.exit(0)

    # claude -p <prompt>
    prompt = args[1]
    out = re.search(r"Write your final result to (.+)\\.$", prompt, re.M).group(1)
    agent = re.search(r"Follow the agent definition in (.+)\\.$", prompt, re.M).group(1)
    name = os.path.basename(agent)
    if "crash" in name:
        sys.stderr.write("claude failed\\n")
        sys.exit(2)
    if "silent" in name:
        sys.exit(0)
    with open(out + ".tmp", "w") as f:
        f.write("result for " + os.path.basename(out))
    os.replace(out + ".tmp", out)
    time.sleep(0.1)
''')


@pytest.fixture
def fake_cli(tmp_path) -> str:
    """Command string for a Python script standing in for claude/opencode."""
    script = tmp_path / "fake_cli.py"
    script.write_text(FAKE_CLI)
    return f"{shlex.quote(sys.executable)} {shlex.quote(str(script))}"


@pytest.fixture
def agent_file(tmp_path) -> Callable[[str], str]:
    """Create an agent definition file and return its absolute path."""
    agents = tmp_path / "agents"
    agents.mkdir(exist_ok=True)

    def _make(name: str = "gsd-researcher") -> str:
        path = agents / f"{name}.md"
        path.write_text(f"---\nname: {name}\n---\nDo research.\n")
        return str(path)

    return _make


@pytest.fixture
def claude_settings(tmp_path, fake_cli) -> GsdSettings:
    return GsdSettings(
        _env_file=None,
        CLAUDE_CONFIG_DIR=str(tmp_path / "claude"),
        CLAUDE_BIN=fake_cli,
        AGENT_OUTPUT_DIR=str(tmp_path / "agent-output"),
        AGENT_POLL_INTERVAL=0.02,
    )


@pytest.fixture
def opencode_settings(tmp_path, fake_cli) -> GsdSettings:
    return GsdSettings(
        _env_file=None,
        OPENCODE_CONFIG=str(tmp_path / "opencode" / "opencode.json"),
        OPENCODE_BIN=fake_cli,
    )


# ── Stub agents / adapter for runner tests ───────────────────


class StubAgentInstance(AgentInstance):
    """AgentInstance that settles after an optional gate and delay."""

    def __init__(
        self,
        agent_id: str,
        output: str = "output",
        fail: bool = False,
        delay: float = 0.0,
        gate: Optional[asyncio.Event] = None,
        on_complete: Optional[List[str]] = None,
    ) -> None:
        super().__init__(agent_id)
        self._output = output
        self._should_fail = fail
        self._delay = delay
        self._gate = gate
        self._on_complete = on_complete
        self._start_monitor()

    async def _monitor(self) -> None:
        from gsd_platform.core.errors import AgentFailedError

        if self._gate is not None:
            await self._gate.wait()
        await asyncio.sleep(self._delay)
        if self._on_complete is not None:
            self._on_complete.append(self.id)
        if self._should_fail:
            self._fail(AgentFailedError(self.id, "failed with exit code 1", exit_code=1))
        else:
            self._complete()

    async def _read_output(self) -> str:
        return self._output


class MockAdapter:
    """Minimal adapter surface used by spawn_parallel_agents."""

    name = PlatformType.CLAUDE_CODE

    def __init__(self, spawn: Callable, parallel: bool = True) -> None:
        self._spawn = spawn
        self._parallel = parallel
        self.spawned: List[str] = []

    async def spawn_agent(self, agent_path, args=None):
        self.spawned.append(agent_path)
        return await self._spawn(agent_path, args or {})

    def supports_parallel_agents(self) -> bool:
        return self._parallel


@pytest.fixture
def stub_agent():
    """StubAgentInstance factory."""
    return StubAgentInstance


@pytest.fixture
def mock_adapter():
    """MockAdapter factory."""
    return MockAdapter
