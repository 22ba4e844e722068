# Copyright (c) 2026 GSD Contributors. All Rights Reserved.
"""Unit tests for structured logging."""

import json
import logging

from gsd_platform.core.logging import StructuredFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="gsd.test", level=logging.INFO, pathname=__file__, lineno=1,
        msg="Spawned agent %s", args=("a-1",), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_basic_fields(self):
        entry = json.loads(StructuredFormatter().format(_record()))
        assert entry["level"] == "INFO"
        assert entry["module"] == "gsd.test"
        assert entry["message"] == "Spawned agent a-1"

    def test_context_attached(self):
        entry = json.loads(
            StructuredFormatter().format(_record(agent_id="a-1", platform="opencode"))
        )
        assert entry["agent_id"] == "a-1"
        assert entry["platform"] == "opencode"
        assert "event_type" not in entry

    def test_setup_logging_sets_level(self):
        root = logging.getLogger()
        old_handlers, old_level = root.handlers[:], root.level
        try:
            setup_logging("debug")
            assert root.level == logging.DEBUG
            assert isinstance(root.handlers[0].formatter, StructuredFormatter)
        finally:
            root.handlers[:] = old_handlers
            root.setLevel(old_level)
