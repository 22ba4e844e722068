# Copyright (c) 2026 GSD Contributors. All Rights Reserved.
"""Unit tests for shared types and the error taxonomy."""

import pytest
from pydantic import ValidationError

from gsd_platform.agents.base import exit_failure, signal_name
from gsd_platform.core.errors import (
    AgentFailedError,
    CollisionError,
    MultiAgentError,
    NotFoundError,
    PlatformError,
    UnsupportedError,
)
from gsd_platform.protocols.types import AgentSpec, AgentStatus, PlatformType
from gsd_platform.runtime.agent_runner import AgentBatchResult, AgentFailure


class TestPlatformType:
    @pytest.mark.parametrize("raw,expected", [
        ("claude-code", PlatformType.CLAUDE_CODE),
        (" opencode\n", PlatformType.OPENCODE),
        ("unknown", None),
        ("Claude-Code", None),
        ("", None),
        (None, None),
    ])
    def test_parse(self, raw, expected):
        assert PlatformType.parse(raw) is expected

    def test_string_value(self):
        assert PlatformType.OPENCODE == "opencode"


class TestAgentStatus:
    def test_terminal_states(self):
        assert not AgentStatus.RUNNING.is_terminal
        assert AgentStatus.COMPLETED.is_terminal
        assert AgentStatus.FAILED.is_terminal


class TestAgentSpec:
    def test_defaults(self):
        spec = AgentSpec(path="/a/gsd-planner.md")
        assert spec.args == {}

    def test_tilde_path_expanded(self, home):
        assert AgentSpec(path="~/agents/a.md").path == str(home / "agents" / "a.md")

    def test_path_normalized(self):
        assert AgentSpec(path="/a/./b/../c.md").path == "/a/c.md"

    def test_relative_path_rejected(self):
        with pytest.raises(ValidationError):
            AgentSpec(path="agents/a.md")

    def test_frozen(self):
        spec = AgentSpec(path="/a.md")
        with pytest.raises(ValidationError):
            spec.path = "/b.md"


class TestErrors:
    def test_all_are_platform_errors(self):
        for err in (
            NotFoundError("Agent definition", "/x.md"),
            UnsupportedError("opencode", "status line"),
            CollisionError("plan", "/c/plan.md"),
            AgentFailedError("a-1", "failed with exit code 1", exit_code=1),
        ):
            assert isinstance(err, PlatformError)
            assert err.code

    def test_agent_failed_message_includes_stderr(self):
        err = AgentFailedError("a-1", "failed with exit code 2", exit_code=2, stderr="oops\n")
        assert str(err) == "Agent a-1 failed with exit code 2\noops"
        assert err.details == {"agent_id": "a-1", "exit_code": 2, "signal": None}

    def test_multi_agent_error_carries_result(self):
        failure = AgentFailure(AgentSpec(path="/a.md"), RuntimeError("x"))
        result = AgentBatchResult(failed=(failure,))
        err = MultiAgentError(result)
        assert err.result is result
        assert err.failed == (failure,)
        assert err.successful == ()
        assert err.details == {"succeeded": 0, "failed": 1}


class TestExitFailure:
    def test_exit_code(self):
        err = exit_failure("a-1", 3, "boom\n")
        assert str(err) == "Agent a-1 failed with exit code 3\nboom"
        assert err.signal_name is None

    def test_signal_with_subject(self):
        err = exit_failure("a-1", -15, subject="host process")
        assert str(err) == "Agent a-1 host process terminated by signal SIGTERM"
        assert err.signal_name == "SIGTERM"
        assert err.exit_code == -15

    def test_unnamed_signal(self):
        assert signal_name(250) == "signal 250"
