# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
OpenCode Adapter.

Config lives in <config_dir>/opencode.json, or opencode.jsonc when only
that exists (JSON with comments). Writes go back to the same file as
plain JSON, so comments are not preserved.

OpenCode has no hook or status line mechanism GSD can register with:
register_hook/unregister_hook are logged no-ops, configure_status_line
raises UnsupportedError. Agents run as `opencode run` child processes.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional

from gsd_platform.adapters.base import PlatformAdapter, build_agent_prompt
from gsd_platform.agents.process import ProcessAgentInstance
from gsd_platform.core.config import GsdSettings
from gsd_platform.kernel.paths import OpenCodePaths
from gsd_platform.protocols.hooks import validate_hook_type
from gsd_platform.protocols.types import PlatformType

logger = logging.getLogger("gsd.adapter.opencode")

CONFIG_FILENAME = "opencode.json"
JSONC_CONFIG_FILENAME = "opencode.jsonc"


class OpenCodeAdapter(PlatformAdapter):
    """OpenCode supports parallel agents only."""

    name = PlatformType.OPENCODE
    allow_config_comments = True

    def __init__(
        self,
        paths: Optional[OpenCodePaths] = None,
        settings: Optional[GsdSettings] = None,
    ) -> None:
        super().__init__(paths or OpenCodePaths(settings), settings)

    def get_config_path(self) -> str:
        config_dir = self.get_config_dir()
        json_path = os.path.join(config_dir, CONFIG_FILENAME)
        jsonc_path = os.path.join(config_dir, JSONC_CONFIG_FILENAME)
        if not os.path.exists(json_path) and os.path.exists(jsonc_path):
            return jsonc_path
        return json_path

    # ── Hooks (no-op) ───────────────────────────────────────────

    async def register_hook(self, event_type: str, command: str) -> None:
        validate_hook_type(event_type, self.name.value)
        logger.warning(
            "OpenCode does not support hooks; skipped %s hook %s", event_type, command,
            extra={"event_type": event_type, "platform": self.name.value},
        )

    async def unregister_hook(self, event_type: str, command: Optional[str] = None) -> None:
        validate_hook_type(event_type, self.name.value)
        logger.debug("OpenCode does not support hooks; nothing to unregister")

    # ── Agents ──────────────────────────────────────────────────

    async def _launch(
        self,
        agent_id: str,
        agent_path: str,
        args: Dict[str, str],
    ) -> ProcessAgentInstance:
        prompt = build_agent_prompt(agent_path, args)
        process = await self._start_process(
            agent_path,
            self._env().OPENCODE_BIN,
            ["run", "--agent", Path(agent_path).stem, prompt],
        )
        return ProcessAgentInstance(agent_id, process)

    # ── Capabilities ────────────────────────────────────────────

    def supports_parallel_agents(self) -> bool:
        return True

    def supports_status_line(self) -> bool:
        return False

    def supports_hooks(self) -> bool:
        return False
