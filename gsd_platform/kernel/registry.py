# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Platform Registry — Detect once, build once, reuse.

The first get_resolver()/get_adapter() call runs platform detection and
caches the result for the rest of the process. Later environment changes
are ignored until reset(). inject()/inject_adapter() bypass detection
entirely and are the sanctioned way to supply test doubles.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from gsd_platform.adapters.base import PlatformAdapter
from gsd_platform.adapters.claude_code import ClaudeCodeAdapter
from gsd_platform.adapters.opencode import OpenCodeAdapter
from gsd_platform.core.errors import PlatformDetectionError
from gsd_platform.kernel.detection import detect_platform
from gsd_platform.kernel.paths import ClaudeCodePaths, OpenCodePaths, PathResolver
from gsd_platform.protocols.types import PlatformType

logger = logging.getLogger("gsd.registry")


def create_resolver(platform: PlatformType) -> PathResolver:
    """Build the PathResolver for a concrete platform."""
    if platform is PlatformType.CLAUDE_CODE:
        return ClaudeCodePaths()
    if platform is PlatformType.OPENCODE:
        return OpenCodePaths()
    raise PlatformDetectionError()


def create_adapter(
    platform: PlatformType,
    resolver: Optional[PathResolver] = None,
) -> PlatformAdapter:
    """Build the PlatformAdapter for a concrete platform."""
    if platform is PlatformType.CLAUDE_CODE:
        return ClaudeCodeAdapter(resolver)
    if platform is PlatformType.OPENCODE:
        return OpenCodeAdapter(resolver)
    raise PlatformDetectionError()


class PlatformRegistry:
    """
    Process-scoped cache of the resolved platform.

    Args:
        detector: Detection function (default: detect_platform)
    """

    def __init__(self, detector: Callable[[], PlatformType] = detect_platform) -> None:
        self._detector = detector
        self._resolver: Optional[PathResolver] = None
        self._adapter: Optional[PlatformAdapter] = None

    def _detect(self) -> PlatformType:
        platform = self._detector()
        if platform is PlatformType.UNKNOWN:
            raise PlatformDetectionError()
        logger.info("Detected platform: %s", platform.value, extra={"platform": platform.value})
        return platform

    def get_resolver(self) -> PathResolver:
        """Return the cached PathResolver, detecting on first use."""
        if self._resolver is None:
            if self._adapter is not None:
                self._resolver = self._adapter.paths
            else:
                self._resolver = create_resolver(self._detect())
        return self._resolver

    def get_adapter(self) -> PlatformAdapter:
        """Return the cached PlatformAdapter, built for the resolver's platform."""
        if self._adapter is None:
            resolver = self.get_resolver()
            self._adapter = create_adapter(resolver.name, resolver)
        return self._adapter

    def inject(self, resolver: PathResolver) -> None:
        """Use resolver without detection (for testing)."""
        self._resolver = resolver
        self._adapter = None

    def inject_adapter(self, adapter: PlatformAdapter) -> None:
        """Use adapter (and its resolver) without detection (for testing)."""
        self._adapter = adapter
        self._resolver = adapter.paths

    def reset(self) -> None:
        """Forget cached instances; the next call detects again."""
        self._resolver = None
        self._adapter = None

    @property
    def is_resolved(self) -> bool:
        return self._resolver is not None


# Global singleton
default_registry = PlatformRegistry()
