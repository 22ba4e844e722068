# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Path Resolution — Platform-specific directory layout.

Each platform names its directories differently (Claude Code uses
"commands", OpenCode uses "command"). Callers only ever see the four
accessors below; every returned path is absolute with "~" already expanded.
Environment overrides are read on every call.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Optional

from gsd_platform.core.config import GsdSettings, get_settings
from gsd_platform.protocols.types import PathSet, PlatformType

GSD_NAMESPACE = "gsd"


def expand_path(value: str) -> str:
    """Expand a leading ~ and make the path absolute."""
    return os.path.abspath(os.path.expanduser(value))


class PathResolver(ABC):
    """
    Resolves the configuration, command, agent and hook directories
    of one platform.
    """

    name: PlatformType = PlatformType.UNKNOWN

    def __init__(self, settings: Optional[GsdSettings] = None) -> None:
        self._settings = settings

    def _env(self) -> GsdSettings:
        return self._settings if self._settings is not None else get_settings()

    @abstractmethod
    def get_config_dir(self) -> str:
        ...

    @abstractmethod
    def get_commands_dir(self) -> str:
        ...

    def get_agents_dir(self) -> str:
        return os.path.join(self.get_config_dir(), "agents")

    def get_hooks_dir(self) -> str:
        return os.path.join(self.get_config_dir(), "hooks")

    def path_set(self) -> PathSet:
        return PathSet(
            config_dir=self.get_config_dir(),
            commands_dir=self.get_commands_dir(),
            agents_dir=self.get_agents_dir(),
            hooks_dir=self.get_hooks_dir(),
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(config_dir={self.get_config_dir()!r})"


class ClaudeCodePaths(PathResolver):
    """
    Claude Code layout.

    Priority: CLAUDE_CONFIG_DIR > ~/.claude
    """

    name = PlatformType.CLAUDE_CODE

    def get_config_dir(self) -> str:
        env_dir = self._env().CLAUDE_CONFIG_DIR
        if env_dir:
            return expand_path(env_dir)
        return expand_path(os.path.join("~", ".claude"))

    def get_commands_dir(self) -> str:
        return os.path.join(self.get_config_dir(), "commands", GSD_NAMESPACE)


class OpenCodePaths(PathResolver):
    """
    OpenCode layout (XDG style on every OS).

    Priority: dirname(OPENCODE_CONFIG) > $XDG_CONFIG_HOME/opencode > ~/.config/opencode
    """

    name = PlatformType.OPENCODE

    def get_config_dir(self) -> str:
        env = self._env()
        if env.OPENCODE_CONFIG:
            # OPENCODE_CONFIG names the config file, not its directory
            return os.path.dirname(expand_path(env.OPENCODE_CONFIG))

        config_home = env.XDG_CONFIG_HOME or os.path.join("~", ".config")
        return os.path.join(expand_path(config_home), "opencode")

    def get_commands_dir(self) -> str:
        # Singular "command"
        return os.path.join(self.get_config_dir(), "command", GSD_NAMESPACE)
