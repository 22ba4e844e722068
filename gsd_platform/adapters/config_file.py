# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Config File I/O — Read, back up and write a platform config document.

Reads accept strict JSON or JSON-with-comments; writes always emit
2-space indented JSON with a trailing newline. Every write that replaces
an existing file first copies it to "<file>.backup" (one generation,
overwritten each time).
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import aiofiles
import aiofiles.os
import json5

from gsd_platform.core.errors import MalformedConfigError

logger = logging.getLogger("gsd.config_file")

BACKUP_SUFFIX = ".backup"


def backup_path_for(path: str) -> str:
    return path + BACKUP_SUFFIX


async def read_config_file(path: str, allow_comments: bool = False) -> Dict[str, Any]:
    """
    Load a config document.

    Returns an empty dict if the file does not exist. Raises
    MalformedConfigError if it exists but does not hold a JSON object.
    """
    if not await aiofiles.os.path.exists(path):
        return {}

    async with aiofiles.open(path, "rb") as f:
        raw = await f.read()

    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedConfigError(path, f"not valid UTF-8 ({exc.reason})") from exc

    if not content.strip():
        raise MalformedConfigError(path, "file is empty")

    try:
        data = json5.loads(content) if allow_comments else json.loads(content)
    except ValueError as exc:
        raise MalformedConfigError(path, str(exc)) from exc

    if not isinstance(data, dict):
        raise MalformedConfigError(
            path, f"expected a JSON object at top level, got {type(data).__name__}"
        )
    return data


async def backup_config_file(path: str) -> Optional[str]:
    """Copy an existing config to its .backup sibling. Returns the backup path."""
    if not await aiofiles.os.path.exists(path):
        return None

    backup = backup_path_for(path)
    async with aiofiles.open(path, "rb") as src:
        content = await src.read()
    async with aiofiles.open(backup, "wb") as dst:
        await dst.write(content)
    logger.debug("Backed up %s -> %s", path, backup)
    return backup


async def write_config_file(path: str, config: Dict[str, Any]) -> Optional[str]:
    """
    Serialize config to path, creating the directory if needed.

    Returns the backup path when a pre-existing file was backed up.
    """
    payload = json.dumps(config, indent=2, ensure_ascii=False) + "\n"

    await aiofiles.os.makedirs(os.path.dirname(path), exist_ok=True)
    backup = await backup_config_file(path)

    async with aiofiles.open(path, "w", encoding="utf-8") as f:
        await f.write(payload)

    logger.info("Wrote config %s", path, extra={"config_path": path})
    return backup
