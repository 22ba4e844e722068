# Copyright (c) 2026 GSD Contributors. All Rights Reserved.

"""
Structured Logging — JSON format with platform/agent context.
"""

from __future__ import annotations

import json
import logging
import sys

_CONTEXT_KEYS = ("platform", "agent_id", "event_type", "config_path")


class StructuredFormatter(logging.Formatter):
    """JSON log formatter with platform/agent context."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }
        # Attach context if available
        for key in _CONTEXT_KEYS:
            val = getattr(record, key, None)
            if val:
                log_entry[key] = str(val)

        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging for the installer."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
