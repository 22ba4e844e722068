# Copyright (c) 2026 GSD Contributors. All Rights Reserved.
"""Unit tests for runtime platform detection."""

import logging

import pytest

from gsd_platform.kernel.detection import detect_platform, write_platform_marker
from gsd_platform.protocols.types import PlatformType


def _claude_installed(home):
    (home / ".claude").mkdir(parents=True, exist_ok=True)
    (home / ".claude" / "settings.json").write_text("{}")


def _opencode_installed(home, filename="opencode.json"):
    (home / ".config" / "opencode").mkdir(parents=True, exist_ok=True)
    (home / ".config" / "opencode" / filename).write_text("{}")


@pytest.fixture
def marker(tmp_path):
    return tmp_path / "install" / ".platform"


class TestExplicitOverride:
    def test_claude_code(self, monkeypatch):
        monkeypatch.setenv("GSD_PLATFORM", "claude-code")
        assert detect_platform() is PlatformType.CLAUDE_CODE

    def test_opencode(self, monkeypatch):
        monkeypatch.setenv("GSD_PLATFORM", "opencode")
        assert detect_platform() is PlatformType.OPENCODE

    def test_invalid_value_falls_through(self, monkeypatch, home):
        monkeypatch.setenv("GSD_PLATFORM", "vscode")
        assert detect_platform() is PlatformType.UNKNOWN

    def test_invalid_value_falls_through_to_probing(self, monkeypatch, home):
        monkeypatch.setenv("GSD_PLATFORM", "unknown")
        _opencode_installed(home)
        assert detect_platform() is PlatformType.OPENCODE

    def test_env_beats_marker(self, monkeypatch, marker):
        marker.parent.mkdir(parents=True)
        marker.write_text("opencode\n")
        monkeypatch.setenv("GSD_PLATFORM", "claude-code")
        assert detect_platform(marker_path=marker) is PlatformType.CLAUDE_CODE


class TestMarkerFile:
    def test_claude_code_marker(self, marker):
        marker.parent.mkdir(parents=True)
        marker.write_text("claude-code\n")
        assert detect_platform(marker_path=marker) is PlatformType.CLAUDE_CODE

    def test_opencode_marker(self, marker):
        marker.parent.mkdir(parents=True)
        marker.write_text("  opencode  ")
        assert detect_platform(marker_path=marker) is PlatformType.OPENCODE

    def test_marker_from_env_setting(self, monkeypatch, marker):
        marker.parent.mkdir(parents=True)
        marker.write_text("opencode")
        monkeypatch.setenv("GSD_PLATFORM_MARKER", str(marker))
        assert detect_platform() is PlatformType.OPENCODE

    def test_invalid_marker_warns_and_falls_through(self, marker, home, caplog):
        marker.parent.mkdir(parents=True)
        marker.write_text("cursor")
        _claude_installed(home)
        with caplog.at_level(logging.WARNING, logger="gsd.detection"):
            assert detect_platform(marker_path=marker) is PlatformType.CLAUDE_CODE
        assert "unrecognized platform" in caplog.text

    def test_unreadable_marker_warns_and_falls_through(self, marker, caplog):
        # A directory where the marker file should be cannot be read
        marker.mkdir(parents=True)
        with caplog.at_level(logging.WARNING, logger="gsd.detection"):
            assert detect_platform(marker_path=marker) is PlatformType.UNKNOWN
        assert "unreadable" in caplog.text

    def test_marker_beats_probing(self, marker, home):
        marker.parent.mkdir(parents=True)
        marker.write_text("opencode")
        _claude_installed(home)
        assert detect_platform(marker_path=marker) is PlatformType.OPENCODE


class TestFilesystemProbing:
    def test_claude_code_settings(self, home):
        _claude_installed(home)
        assert detect_platform() is PlatformType.CLAUDE_CODE

    def test_opencode_json(self, home):
        _opencode_installed(home)
        assert detect_platform() is PlatformType.OPENCODE

    def test_opencode_jsonc(self, home):
        _opencode_installed(home, "opencode.jsonc")
        assert detect_platform() is PlatformType.OPENCODE

    def test_both_platforms_is_ambiguous(self, home, caplog):
        _claude_installed(home)
        _opencode_installed(home)
        with caplog.at_level(logging.WARNING, logger="gsd.detection"):
            assert detect_platform() is PlatformType.UNKNOWN
        assert "GSD_PLATFORM" in caplog.text

    def test_nothing_installed(self, home):
        assert detect_platform() is PlatformType.UNKNOWN

    def test_explicit_home(self, tmp_path):
        other = tmp_path / "other-home"
        _opencode_installed(other)
        assert detect_platform(home=other) is PlatformType.OPENCODE


class TestWriteMarker:
    def test_round_trip(self, marker):
        path = write_platform_marker(PlatformType.OPENCODE, marker)
        assert path.read_text() == "opencode\n"
        assert detect_platform(marker_path=marker) is PlatformType.OPENCODE

    def test_refuses_unknown(self, marker):
        with pytest.raises(ValueError):
            write_platform_marker(PlatformType.UNKNOWN, marker)
        assert not marker.exists()
