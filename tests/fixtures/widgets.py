"""
Test widget implementations.

Loaded through the real import path ("tests.fixtures.widgets:<Name>") so
mount tests exercise lazy resolution end to end.
"""
from showcase.widgets.base import WidgetInterface


class RecordingWidget(WidgetInterface):
    """Widget that records its lifecycle calls."""

    instances = []

    def __init__(self, settings=None):
        super().__init__(settings)
        self.events = []
        self.mounted = False
        self.unmounted = False
        RecordingWidget.instances.append(self)

    def on_mount(self, scope):
        self.mounted = True

    def on_unmount(self, scope):
        self.unmounted = True

    def render(self, scope):
        return f"recording {len(self.events)}"

    def handle_event(self, event, scope):
        if event == "boom":
            raise RuntimeError("event exploded")
        self.events.append(event)
        scope.set("last_event", event)


class CrashingWidget(WidgetInterface):
    """Widget whose render always raises."""

    renders = 0

    def render(self, scope):
        CrashingWidget.renders += 1
        raise ValueError("render exploded")

    def handle_event(self, event, scope):
        pass


class FlakyWidget(WidgetInterface):
    """Widget that raises on render while ``broken`` is set."""

    broken = True

    def render(self, scope):
        if FlakyWidget.broken:
            raise RuntimeError("not yet")
        return "flaky ok"

    def handle_event(self, event, scope):
        pass


class BrokenMountWidget(WidgetInterface):
    """Widget that fails while being mounted."""

    def on_mount(self, scope):
        raise KeyError("missing handle")

    def render(self, scope):
        return "never"

    def handle_event(self, event, scope):
        pass
