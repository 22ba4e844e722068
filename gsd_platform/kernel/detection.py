# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Platform Detection — Which AI coding platform is running GSD.

Priority (highest first), stopping at the first conclusive signal:
  1. GSD_PLATFORM environment variable (explicit override)
  2. .platform marker file written by the installer
  3. Filesystem probing for each platform's config file
Both platforms found during probing is ambiguous and yields UNKNOWN.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from gsd_platform.core.config import GsdSettings, get_settings
from gsd_platform.protocols.types import PlatformType

logger = logging.getLogger("gsd.detection")

MARKER_FILENAME = ".platform"

# Install root: the directory holding the gsd_platform package
_INSTALL_ROOT = Path(__file__).resolve().parent.parent.parent


def default_marker_path(settings: Optional[GsdSettings] = None) -> Path:
    env = settings or get_settings()
    if env.GSD_PLATFORM_MARKER:
        return Path(os.path.expanduser(env.GSD_PLATFORM_MARKER)).absolute()
    return _INSTALL_ROOT / MARKER_FILENAME


def _read_marker(marker_path: Path) -> Optional[PlatformType]:
    if not marker_path.exists():
        return None
    try:
        content = marker_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(
            "Marker file %s is unreadable (%s), falling back to filesystem probing",
            marker_path, exc,
        )
        return None

    platform = PlatformType.parse(content)
    if platform is None:
        logger.warning(
            "Marker file %s contains unrecognized platform %r, "
            "falling back to filesystem probing",
            marker_path, content.strip()[:40],
        )
    return platform


def _probe_filesystem(home: Path) -> PlatformType:
    has_claude_code = (home / ".claude" / "settings.json").exists()
    opencode_dir = home / ".config" / "opencode"
    has_opencode = (
        (opencode_dir / "opencode.json").exists()
        or (opencode_dir / "opencode.jsonc").exists()
    )

    if has_claude_code and has_opencode:
        logger.warning(
            "Both Claude Code and OpenCode detected. Set GSD_PLATFORM to choose "
            "explicitly (GSD_PLATFORM=claude-code or GSD_PLATFORM=opencode)."
        )
        return PlatformType.UNKNOWN
    if has_claude_code:
        return PlatformType.CLAUDE_CODE
    if has_opencode:
        return PlatformType.OPENCODE
    return PlatformType.UNKNOWN


def detect_platform(
    settings: Optional[GsdSettings] = None,
    marker_path: Optional[Union[str, Path]] = None,
    home: Optional[Union[str, Path]] = None,
) -> PlatformType:
    """
    Detect the current platform.

    Args:
        settings: Settings to read GSD_PLATFORM from (default: current environment)
        marker_path: Marker file location (default: GSD_PLATFORM_MARKER or install root)
        home: Home directory to probe (default: the user's home)

    Returns:
        The detected PlatformType, UNKNOWN when nothing conclusive was found.
    """
    env = settings or get_settings()

    explicit = PlatformType.parse(env.GSD_PLATFORM)
    if explicit is not None:
        logger.debug("Platform from GSD_PLATFORM: %s", explicit.value)
        return explicit

    marker = Path(marker_path) if marker_path else default_marker_path(env)
    from_marker = _read_marker(marker)
    if from_marker is not None:
        logger.debug("Platform from marker %s: %s", marker, from_marker.value)
        return from_marker

    probed = _probe_filesystem(Path(home) if home else Path.home())
    logger.debug("Platform from filesystem probing: %s", probed.value)
    return probed


def write_platform_marker(
    platform: PlatformType,
    marker_path: Optional[Union[str, Path]] = None,
) -> Path:
    """Persist the installer's platform choice for later detection."""
    if PlatformType.parse(platform.value) is None:
        raise ValueError(f"Cannot persist platform marker for {platform.value!r}")
    marker = Path(marker_path) if marker_path else default_marker_path()
    marker.parent.mkdir(parents=True, exist_ok=True)
    marker.write_text(platform.value + "\n", encoding="utf-8")
    logger.info("Wrote platform marker %s (%s)", marker, platform.value)
    return marker
