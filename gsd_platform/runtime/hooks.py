# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Hook Helpers — Pure functions over the config "hooks" section.

Layout:
    {"hooks": {"SessionStart": [{"hooks": [{"type": "command", "command": "..."}]}]}}
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Optional, Tuple

# Hook scripts shipped by earlier releases, removed or renamed since
ORPHANED_HOOK_PATTERNS = (
    "gsd-notify.sh",
    "hooks/statusline.js",
    "gsd-intel-index.js",
    "gsd-intel-session.js",
    "gsd-intel-prune.js",
)


def _entry_commands(entry: Any) -> List[str]:
    if not isinstance(entry, dict):
        return []
    inner = entry.get("hooks")
    if not isinstance(inner, list):
        return []
    return [h["command"] for h in inner if isinstance(h, dict) and isinstance(h.get("command"), str)]


def hooks_enabled(config: Dict[str, Any]) -> bool:
    """
    Whether GSD may install hooks.

    Users opt out with {"gsd": {"hooks": {"enabled": false}}}; default is True.
    """
    gsd = config.get("gsd")
    if not isinstance(gsd, dict) or not isinstance(gsd.get("hooks"), dict):
        return True
    return gsd["hooks"].get("enabled") is not False


def build_hook_command(config_dir: str, hook_name: str) -> str:
    """Node invocation for a hook script, with forward slashes on every OS."""
    hooks_path = config_dir.replace("\\", "/").rstrip("/") + "/hooks/" + hook_name
    return f'node "{hooks_path}"'


def has_hook(config: Dict[str, Any], event_type: str, command: str) -> bool:
    hooks = config.get("hooks")
    if not isinstance(hooks, dict):
        return False
    entries = hooks.get(event_type) or []
    return any(command in _entry_commands(entry) for entry in entries)


def add_hook_entry(config: Dict[str, Any], event_type: str, command: str) -> bool:
    """
    Append a command hook for event_type, in place.

    Returns False (and leaves config untouched) if the same command is
    already registered for that event.
    """
    if has_hook(config, event_type, command):
        return False
    hooks = config.setdefault("hooks", {})
    hooks.setdefault(event_type, []).append(
        {"hooks": [{"type": "command", "command": command}]}
    )
    return True


def remove_hook_entries(
    config: Dict[str, Any],
    event_type: str,
    command: Optional[str] = None,
) -> int:
    """
    Remove entries for event_type, in place.

    With command, only entries carrying that command are removed.
    Returns the number of entries removed. An emptied event key is dropped.
    """
    hooks = config.get("hooks")
    if not isinstance(hooks, dict) or event_type not in hooks:
        return 0

    entries = hooks[event_type] if isinstance(hooks[event_type], list) else []
    if command is None:
        kept: List[Any] = []
    else:
        kept = [e for e in entries if command not in _entry_commands(e)]

    removed = len(entries) - len(kept)
    if kept:
        hooks[event_type] = kept
    elif removed or command is None:
        del hooks[event_type]
    return removed


def remove_orphaned_hooks(
    config: Dict[str, Any],
    patterns: Iterable[str] = ORPHANED_HOOK_PATTERNS,
) -> Tuple[Dict[str, Any], int]:
    """
    Return a copy of config without entries whose commands match any pattern.

    Returns (cleaned_config, removed_count).
    """
    patterns = tuple(patterns)
    cleaned = copy.deepcopy(config)
    hooks = cleaned.get("hooks")
    if not isinstance(hooks, dict):
        return cleaned, 0

    removed = 0
    for event_type, entries in hooks.items():
        if not isinstance(entries, list):
            continue
        kept = [
            e for e in entries
            if not any(p in cmd for cmd in _entry_commands(e) for p in patterns)
        ]
        removed += len(entries) - len(kept)
        hooks[event_type] = kept
    return cleaned, removed
