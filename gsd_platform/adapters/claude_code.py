# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Claude Code Adapter.

Config lives in <config_dir>/settings.json (strict JSON). Hooks are
registered in its "hooks" section and the status line under
"statusLine". Agents run through the Claude CLI in print mode and
report completion by writing a result artifact.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Dict, Optional

import aiofiles.os

from gsd_platform.adapters.base import PlatformAdapter, build_agent_prompt
from gsd_platform.agents.artifact import ArtifactAgentInstance
from gsd_platform.core.config import GsdSettings
from gsd_platform.core.errors import MalformedConfigError
from gsd_platform.kernel.paths import ClaudeCodePaths, expand_path
from gsd_platform.protocols.hooks import validate_hook_type
from gsd_platform.protocols.types import PlatformType
from gsd_platform.runtime.hooks import add_hook_entry, remove_hook_entries

logger = logging.getLogger("gsd.adapter.claude_code")

SETTINGS_FILENAME = "settings.json"


class ClaudeCodeAdapter(PlatformAdapter):
    """Claude Code supports hooks, a status line and parallel agents."""

    name = PlatformType.CLAUDE_CODE

    def __init__(
        self,
        paths: Optional[ClaudeCodePaths] = None,
        settings: Optional[GsdSettings] = None,
    ) -> None:
        super().__init__(paths or ClaudeCodePaths(settings), settings)

    def get_config_path(self) -> str:
        return os.path.join(self.get_config_dir(), SETTINGS_FILENAME)

    # ── Hooks ───────────────────────────────────────────────────

    def _check_hooks_section(self, config: Dict[str, Any], event_type: str) -> None:
        hooks = config.get("hooks")
        if hooks is None:
            return
        if not isinstance(hooks, dict):
            raise MalformedConfigError(self.get_config_path(), '"hooks" is not an object')
        if event_type in hooks and not isinstance(hooks[event_type], list):
            raise MalformedConfigError(
                self.get_config_path(), f'"hooks.{event_type}" is not a list'
            )

    async def register_hook(self, event_type: str, command: str) -> None:
        """Add a command hook; a repeated (event_type, command) is a no-op."""
        validate_hook_type(event_type, self.name.value)
        config = await self.read_config()
        self._check_hooks_section(config, event_type)

        if not add_hook_entry(config, event_type, command):
            logger.debug(
                "Hook already registered: %s -> %s", event_type, command,
                extra={"event_type": event_type},
            )
            return

        await self.write_config(config)
        logger.info(
            "Registered %s hook: %s", event_type, command,
            extra={"event_type": event_type, "platform": self.name.value},
        )

    async def unregister_hook(self, event_type: str, command: Optional[str] = None) -> None:
        """Remove hooks for event_type (only `command` when given)."""
        validate_hook_type(event_type, self.name.value)
        config = await self.read_config()
        self._check_hooks_section(config, event_type)

        removed = remove_hook_entries(config, event_type, command)
        if not removed:
            logger.debug("No %s hook to remove", event_type, extra={"event_type": event_type})
            return

        await self.write_config(config)
        logger.info(
            "Unregistered %d %s hook(s)", removed, event_type,
            extra={"event_type": event_type, "platform": self.name.value},
        )

    async def configure_status_line(self, command: str) -> None:
        await self.merge_config({"statusLine": {"type": "command", "command": command}})
        logger.info("Configured status line: %s", command)

    # ── Agents ──────────────────────────────────────────────────

    def get_agent_output_dir(self) -> str:
        return expand_path(self._env().AGENT_OUTPUT_DIR)

    async def _launch(
        self,
        agent_id: str,
        agent_path: str,
        args: Dict[str, str],
    ) -> ArtifactAgentInstance:
        env = self._env()
        output_dir = self.get_agent_output_dir()
        await aiofiles.os.makedirs(output_dir, exist_ok=True)
        output_path = os.path.join(output_dir, f"{agent_id}.md")

        prompt = build_agent_prompt(agent_path, args, output_path=output_path)
        process = await self._start_process(
            agent_path,
            env.CLAUDE_BIN,
            ["-p", prompt],
            stdout=asyncio.subprocess.DEVNULL,
        )
        return ArtifactAgentInstance(
            agent_id,
            output_path,
            process=process,
            poll_interval=env.AGENT_POLL_INTERVAL,
        )

    # ── Capabilities ────────────────────────────────────────────

    def supports_parallel_agents(self) -> bool:
        return True

    def supports_status_line(self) -> bool:
        return True

    def supports_hooks(self) -> bool:
        return True
