"""Pytest configuration and fixtures for niri scheduler bridge tests."""

from typing import Any, Dict, List

import pytest

from doubles import RecordingNotifier


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def niri_window_payload() -> Dict[str, Any]:
    """Window object as niri serializes it."""
    return {
        "id": 12,
        "title": "nixos-config - nvim",
        "app_id": "com.mitchellh.ghostty",
        "pid": 4242,
        "workspace_id": 3,
        "is_focused": True,
        "is_floating": False,
        "is_urgent": False,
    }


@pytest.fixture
def niri_event_lines(niri_window_payload) -> List[Dict[str, Any]]:
    """A short, realistic niri event stream."""
    return [
        {"WorkspacesChanged": {"workspaces": []}},
        {"WindowsChanged": {"windows": [niri_window_payload]}},
        {"KeyboardLayoutsChanged": {"keyboard_layouts": {"names": ["us"], "current_idx": 0}}},
        {"WindowFocusChanged": {"id": 12}},
        {"WindowFocusChanged": {"id": None}},
    ]
