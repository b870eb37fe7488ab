"""
Unit tests for TUI widgets.
Tests WidgetHost and WidgetCard outside a running app.
"""
from cli.tui.widgets import TICK_SECONDS, WidgetCard, WidgetHost
from showcase.models import WidgetEntry


class TestWidgetHost:
    """Test WidgetHost construction."""

    def test_initial_state(self, registry, settings):
        host = WidgetHost("terminal", registry=registry, settings=settings)

        assert host.key == "terminal"
        assert host.widget_mount is None

    def test_refresh_without_mount(self, registry, settings):
        host = WidgetHost("terminal", registry=registry, settings=settings)
        assert host.refresh_output() is None

    def test_tick_interval(self):
        assert TICK_SECONDS == 1.0


class TestWidgetCard:
    """Test WidgetCard construction."""

    def test_keeps_entry(self, registry, settings):
        entry = registry.lookup("terminal")
        card = WidgetCard(entry, registry=registry, settings=settings)

        assert card.entry is entry

    def test_host_id_from_key(self, registry, settings):
        entry = WidgetEntry(key="hosted", title="Hosted Elsewhere", subdomain="hosted.example.com")
        card = WidgetCard(entry, registry=registry, settings=settings)

        hosts = [w for w in card.compose() if isinstance(w, WidgetHost)]

        assert len(hosts) == 1
        assert hosts[0].id == "host-hosted"
        assert hosts[0].key == "hosted"
