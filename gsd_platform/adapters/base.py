# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
PlatformAdapter — Contract every platform implementation satisfies.

Covers path resolution (delegated to a PathResolver), config
read/merge/write, hook and command registration, agent spawning and
capability queries. Capabilities are constant for the lifetime of an
adapter; unsupported operations raise UnsupportedError unless the
adapter documents a no-op.

Mutating config operations do a full read-modify-write and assume a
single writer at a time. Nothing here locks the file.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles
import aiofiles.os

from gsd_platform.adapters.config_file import read_config_file, write_config_file
from gsd_platform.agents.base import AgentInstance
from gsd_platform.core.config import GsdSettings, get_settings
from gsd_platform.core.errors import (
    CollisionError,
    InvalidInputError,
    NotFoundError,
    SpawnFailureError,
    UnsupportedError,
)
from gsd_platform.kernel.paths import PathResolver
from gsd_platform.protocols.types import PathSet, PlatformType

logger = logging.getLogger("gsd.adapter")

COMMAND_SUFFIX = ".md"

_UNSAFE_NAME_CHARS = frozenset("/\\*?[]")


def new_agent_id(agent_path: str) -> str:
    """Unique, human-readable agent id: <file stem>-<8 hex>."""
    return f"{Path(agent_path).stem}-{uuid.uuid4().hex[:8]}"


def build_agent_prompt(
    agent_path: str,
    args: Dict[str, str],
    output_path: Optional[str] = None,
) -> str:
    """Render the instruction handed to a platform CLI."""
    lines = [f"Follow the agent definition in {agent_path}."]
    if args:
        lines.append("")
        lines.append("Arguments:")
        for key, value in args.items():
            lines.append(f"- {key}: {value}")
    if output_path:
        lines.append("")
        lines.append(f"Write your final result to {output_path}.")
    return "\n".join(lines)


class PlatformAdapter(ABC):
    """
    Abstract base class for platform adapters.

    Subclasses set `name`, implement get_config_path(), the hook methods,
    _launch() and the capability queries.
    """

    name: PlatformType = PlatformType.UNKNOWN
    version: str = "1.0.0"

    # Parse config with comments (JSONC)
    allow_config_comments: bool = False

    def __init__(
        self,
        paths: PathResolver,
        settings: Optional[GsdSettings] = None,
    ) -> None:
        self._paths = paths
        self._settings = settings

    def _env(self) -> GsdSettings:
        return self._settings if self._settings is not None else get_settings()

    # ── Path resolution ─────────────────────────────────────────

    @property
    def paths(self) -> PathResolver:
        return self._paths

    def get_config_dir(self) -> str:
        return self._paths.get_config_dir()

    def get_commands_dir(self) -> str:
        return self._paths.get_commands_dir()

    def get_agents_dir(self) -> str:
        return self._paths.get_agents_dir()

    def get_hooks_dir(self) -> str:
        return self._paths.get_hooks_dir()

    def path_set(self) -> PathSet:
        return self._paths.path_set()

    @abstractmethod
    def get_config_path(self) -> str:
        """Absolute path of the platform's config document."""
        ...

    # ── Configuration ───────────────────────────────────────────

    async def read_config(self) -> Dict[str, Any]:
        """Return the config, {} if absent. Raises MalformedConfigError."""
        return await read_config_file(
            self.get_config_path(), allow_comments=self.allow_config_comments
        )

    async def write_config(self, config: Dict[str, Any]) -> None:
        """
        Replace the config document.

        Backs up a pre-existing file first. Does not preserve keys absent
        from config; use merge_config() for that.
        """
        await write_config_file(self.get_config_path(), config)

    async def merge_config(self, updates: Dict[str, Any]) -> None:
        """
        Overlay updates onto the existing config (shallow).

        Each top-level key in updates replaces the original value whole;
        nested objects are not merged recursively.
        """
        existing = await self.read_config()
        merged = {**existing, **updates}
        await self.write_config(merged)

    async def configure_status_line(self, command: str) -> None:
        raise UnsupportedError(self.name.value, "status line")

    # ── Hooks ───────────────────────────────────────────────────

    @abstractmethod
    async def register_hook(self, event_type: str, command: str) -> None:
        ...

    @abstractmethod
    async def unregister_hook(self, event_type: str, command: Optional[str] = None) -> None:
        ...

    # ── Commands ────────────────────────────────────────────────

    async def register_command(self, command_path: str) -> None:
        """
        Install a command file into the platform's command directory.

        Re-registering identical content is a no-op. A different file
        already holding the name raises CollisionError.
        """
        source = Path(command_path)
        if not source.is_file():
            raise NotFoundError("Command file", command_path)

        target = Path(self.get_commands_dir()) / source.name
        async with aiofiles.open(source, "rb") as f:
            content = await f.read()

        if await aiofiles.os.path.exists(target):
            async with aiofiles.open(target, "rb") as f:
                existing = await f.read()
            if existing == content:
                logger.debug("Command %s already registered", source.stem)
                return
            raise CollisionError(source.stem, str(target))

        await aiofiles.os.makedirs(target.parent, exist_ok=True)
        async with aiofiles.open(target, "wb") as f:
            await f.write(content)
        logger.info(
            "Registered command %s -> %s", source.stem, target,
            extra={"platform": self.name.value},
        )

    async def unregister_command(self, name: str) -> None:
        """
        Remove <commands_dir>/<name>.md. Unknown names are a no-op.

        A leading "/" is accepted; names holding path separators or glob
        characters raise InvalidInputError.
        """
        name = name.lstrip("/")
        if not name or name in (".", "..") or any(c in name for c in _UNSAFE_NAME_CHARS):
            raise InvalidInputError("command name", repr(name))

        target = Path(self.get_commands_dir()) / f"{name}{COMMAND_SUFFIX}"
        if not await aiofiles.os.path.isfile(target):
            logger.debug("Command %s not registered, nothing to remove", name)
            return
        await aiofiles.os.remove(target)
        logger.info(
            "Unregistered command %s (%s)", name, target,
            extra={"platform": self.name.value},
        )

    # ── Agents ──────────────────────────────────────────────────

    async def spawn_agent(
        self,
        agent_path: str,
        args: Optional[Dict[str, str]] = None,
    ) -> AgentInstance:
        """
        Start an agent without waiting for it.

        Raises NotFoundError before anything is started if agent_path is
        missing, and SpawnFailureError if the platform refuses to start it.
        """
        if not Path(agent_path).is_file():
            raise NotFoundError("Agent definition", agent_path)

        agent_id = new_agent_id(agent_path)
        instance = await self._launch(agent_id, agent_path, dict(args or {}))
        logger.info(
            "Spawned agent %s from %s", agent_id, agent_path,
            extra={"agent_id": agent_id, "platform": self.name.value},
        )
        return instance

    @abstractmethod
    async def _launch(
        self,
        agent_id: str,
        agent_path: str,
        args: Dict[str, str],
    ) -> AgentInstance:
        ...

    async def _start_process(
        self,
        agent_path: str,
        binary: str,
        cli_args: List[str],
        stdout: Optional[int] = asyncio.subprocess.PIPE,
    ) -> asyncio.subprocess.Process:
        """Start a platform CLI, translating OS refusals to SpawnFailureError."""
        argv = shlex.split(binary)
        if not argv:
            raise SpawnFailureError(agent_path, "no executable configured")
        try:
            return await asyncio.create_subprocess_exec(
                *argv,
                *cli_args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=stdout,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise SpawnFailureError(agent_path, f"{argv[0]}: {exc}") from exc

    # ── Capabilities ────────────────────────────────────────────

    @abstractmethod
    def supports_parallel_agents(self) -> bool:
        ...

    @abstractmethod
    def supports_status_line(self) -> bool:
        ...

    @abstractmethod
    def supports_hooks(self) -> bool:
        ...

    def capabilities(self) -> Dict[str, bool]:
        return {
            "parallel_agents": self.supports_parallel_agents(),
            "status_line": self.supports_status_line(),
            "hooks": self.supports_hooks(),
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name.value!r})"
