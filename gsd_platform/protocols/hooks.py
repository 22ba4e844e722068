# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Hook Event Types — Lifecycle events a hook can be registered for.

Names match the keys used under the config file's "hooks" section.
"""

from gsd_platform.core.errors import UnsupportedError

# --- Session Lifecycle ---
SESSION_START = "SessionStart"
SESSION_END = "SessionEnd"
STATUS_LINE = "StatusLine"

# --- Tool Use ---
PRE_TOOL_USE = "PreToolUse"
POST_TOOL_USE = "PostToolUse"

# --- Turn Lifecycle ---
USER_PROMPT_SUBMIT = "UserPromptSubmit"
NOTIFICATION = "Notification"
STOP = "Stop"
SUBAGENT_STOP = "SubagentStop"
PRE_COMPACT = "PreCompact"

# All known hook event types (for validation)
ALL_HOOK_TYPES = {
    SESSION_START,
    SESSION_END,
    STATUS_LINE,
    PRE_TOOL_USE,
    POST_TOOL_USE,
    USER_PROMPT_SUBMIT,
    NOTIFICATION,
    STOP,
    SUBAGENT_STOP,
    PRE_COMPACT,
}


def validate_hook_type(event_type: str, platform: str) -> str:
    """Return event_type if known, else raise UnsupportedError."""
    if event_type not in ALL_HOOK_TYPES:
        raise UnsupportedError(platform, f"hook event '{event_type}'")
    return event_type
