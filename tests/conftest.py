"""
Pytest configuration and shared fixtures for Showcase tests.
"""
import logging

import pytest

from showcase.models import WidgetEntry
from showcase.registry import WidgetRegistry, build_registry, reset_registry
from showcase.utils.config import Settings
from tests.fixtures.widgets import CrashingWidget, FlakyWidget, RecordingWidget

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture(autouse=True)
def reset_widget_state():
    """Reset the global registry and test widget class state around each test."""
    reset_registry()
    RecordingWidget.instances = []
    CrashingWidget.renders = 0
    FlakyWidget.broken = True
    yield
    reset_registry()


@pytest.fixture
def settings():
    """Development settings, isolated from any local .env file."""
    return Settings(
        ENVIRONMENT="development",
        FEATURE_TERMINAL=False,
        WIDGET_LOAD_TIMEOUT=5.0,
        SESSION_TIMEOUT_SECONDS=120,
        _env_file=None,
    )


@pytest.fixture
def production_settings():
    return Settings(ENVIRONMENT="production", _env_file=None)


@pytest.fixture
def entries():
    """Sample widget entries."""
    return [
        WidgetEntry(
            key="terminal",
            title="Terminal Demo",
            description="Scripted terminal",
            subdomain="terminal.example.com",
            implementation="showcase.widgets.terminal:TerminalDemo",
        ),
        WidgetEntry(key="recording", title="Recording", implementation="tests.fixtures.widgets:RecordingWidget"),
        WidgetEntry(key="crashing", title="Crashing", implementation="tests.fixtures.widgets:CrashingWidget"),
        WidgetEntry(key="flaky", title="Flaky", implementation="tests.fixtures.widgets:FlakyWidget"),
        WidgetEntry(key="broken-mount", title="Broken", implementation="tests.fixtures.widgets:BrokenMountWidget"),
        WidgetEntry(key="missing", title="Missing", implementation="tests.fixtures.nowhere:Widget"),
        WidgetEntry(key="hosted", title="Hosted Elsewhere", subdomain="hosted.example.com"),
    ]


@pytest.fixture
def registry(entries) -> WidgetRegistry:
    """Sealed registry built from the sample entries."""
    return build_registry(entries)
