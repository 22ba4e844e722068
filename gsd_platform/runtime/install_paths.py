# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Install Paths — Where the installer copies commands, agents and hooks.

Global installs follow the platform's PathResolver; local installs go to
./.claude or ./.opencode under the current directory. path_prefix is the
string substituted into installed markdown to reference the config dir.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from gsd_platform.kernel.paths import (
    GSD_NAMESPACE,
    ClaudeCodePaths,
    OpenCodePaths,
    PathResolver,
    expand_path,
)
from gsd_platform.protocols.types import PathSet, PlatformType

_LOCAL_DIRS = {
    PlatformType.CLAUDE_CODE: (".claude", "commands"),
    PlatformType.OPENCODE: (".opencode", "command"),
}


@dataclass(frozen=True)
class InstallPaths:
    config_dir: str
    commands_dir: str
    agents_dir: str
    hooks_dir: str
    path_prefix: str

    def path_set(self) -> PathSet:
        return PathSet(
            config_dir=self.config_dir,
            commands_dir=self.commands_dir,
            agents_dir=self.agents_dir,
            hooks_dir=self.hooks_dir,
        )


def _layout(config_dir: str, commands_name: str, path_prefix: str) -> InstallPaths:
    return InstallPaths(
        config_dir=config_dir,
        commands_dir=os.path.join(config_dir, commands_name, GSD_NAMESPACE),
        agents_dir=os.path.join(config_dir, "agents"),
        hooks_dir=os.path.join(config_dir, "hooks"),
        path_prefix=path_prefix,
    )


def _home_prefix(config_dir: str) -> str:
    home = os.path.expanduser("~")
    if config_dir == home or config_dir.startswith(home + os.sep):
        config_dir = "~" + config_dir[len(home):]
    return config_dir.replace("\\", "/") + "/"


def get_install_paths(
    is_global: bool,
    explicit_config_dir: Optional[str] = None,
    platform: PlatformType = PlatformType.CLAUDE_CODE,
) -> InstallPaths:
    """
    Resolve installation directories.

    Args:
        is_global: Install into the user's platform config instead of cwd
        explicit_config_dir: --config-dir value; honoured for Claude Code only
        platform: Target platform (default Claude Code)
    """
    if platform not in _LOCAL_DIRS:
        raise ValueError(f"Cannot install for platform {platform.value!r}")

    dir_name, commands_name = _LOCAL_DIRS[platform]

    if not is_global:
        config_dir = os.path.join(os.getcwd(), dir_name)
        return _layout(config_dir, commands_name, f"./{dir_name}/")

    if explicit_config_dir and platform is PlatformType.CLAUDE_CODE:
        config_dir = expand_path(explicit_config_dir)
        return _layout(config_dir, commands_name, config_dir.replace("\\", "/") + "/")

    resolver: PathResolver = (
        ClaudeCodePaths() if platform is PlatformType.CLAUDE_CODE else OpenCodePaths()
    )
    paths = resolver.path_set()
    return InstallPaths(
        config_dir=paths.config_dir,
        commands_dir=paths.commands_dir,
        agents_dir=paths.agents_dir,
        hooks_dir=paths.hooks_dir,
        path_prefix=_home_prefix(paths.config_dir),
    )
