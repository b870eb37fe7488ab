"""
Unit tests for the error isolation boundary.

Tests the healthy/failed state machine, fallback content, user-driven
retry, diagnostic logging and error hooks.
"""
import logging
from unittest.mock import Mock

import pytest

from showcase.boundary import ErrorBoundary
from showcase.models import BoundaryStatus, FallbackView


def explode():
    raise RuntimeError("kaboom")


class TestBoundaryStates:
    """Test state transitions."""

    def test_starts_healthy(self, settings):
        boundary = ErrorBoundary(settings=settings)

        assert boundary.status is BoundaryStatus.HEALTHY
        assert boundary.has_failed is False
        assert boundary.last_error is None

    def test_successful_render_passes_through(self, settings):
        boundary = ErrorBoundary(settings=settings)
        assert boundary.render(lambda: "output") == "output"
        assert boundary.status is BoundaryStatus.HEALTHY

    def test_render_error_transitions_to_failed(self, settings):
        boundary = ErrorBoundary(settings=settings)

        result = boundary.render(explode)

        assert isinstance(result, FallbackView)
        assert boundary.status is BoundaryStatus.FAILED
        assert str(boundary.last_error) == "kaboom"

    def test_failed_boundary_does_not_call_render(self, settings):
        boundary = ErrorBoundary(settings=settings)
        boundary.render(explode)
        render_fn = Mock(return_value="output")

        result = boundary.render(render_fn)

        assert isinstance(result, FallbackView)
        render_fn.assert_not_called()

    def test_event_error_transitions_to_failed(self, settings):
        boundary = ErrorBoundary(settings=settings)

        assert boundary.handle_event(explode) is None
        assert boundary.has_failed is True

    def test_event_passes_arguments(self, settings):
        boundary = ErrorBoundary(settings=settings)
        handler = Mock(return_value="handled")

        assert boundary.handle_event(handler, "evt", 2) == "handled"
        handler.assert_called_once_with("evt", 2)

    def test_failed_boundary_ignores_events(self, settings):
        boundary = ErrorBoundary(settings=settings)
        boundary.capture(RuntimeError("earlier"))
        handler = Mock()

        boundary.handle_event(handler)

        handler.assert_not_called()

    def test_base_exceptions_are_not_contained(self, settings):
        boundary = ErrorBoundary(settings=settings)

        def interrupt():
            raise KeyboardInterrupt()

        with pytest.raises(KeyboardInterrupt):
            boundary.render(interrupt)


class TestRetry:
    """Test user-driven retry."""

    def test_retry_returns_to_healthy_and_rerenders(self, settings):
        boundary = ErrorBoundary(settings=settings)
        boundary.render(explode)

        boundary.retry()

        assert boundary.status is BoundaryStatus.HEALTHY
        assert boundary.last_error is None
        assert boundary.render(lambda: "recovered") == "recovered"

    def test_recurring_fault_fails_again_without_auto_retry(self, settings):
        boundary = ErrorBoundary(settings=settings)
        render_fn = Mock(side_effect=RuntimeError("still broken"))

        boundary.render(render_fn)
        boundary.retry()
        result = boundary.render(render_fn)
        boundary.render(render_fn)

        assert isinstance(result, FallbackView)
        assert boundary.status is BoundaryStatus.FAILED
        # one call per user-visible attempt, nothing automatic
        assert render_fn.call_count == 2

    def test_retry_when_healthy_is_noop(self, settings):
        boundary = ErrorBoundary(settings=settings)
        state = boundary.state
        boundary.retry()
        assert boundary.state is state


class TestFallbackAndDiagnostics:
    """Test fallback content and logging."""

    def test_fallback_fixed_content(self, settings):
        boundary = ErrorBoundary(settings=settings)
        view = boundary.render(explode)

        assert view.title == "Demo crashed"
        assert view.message == "This interactive preview encountered an unexpected error."
        assert view.action == "Retry"
        assert "Demo crashed" in view.text

    def test_development_logs_demo_error(self, settings, caplog):
        boundary = ErrorBoundary(name="terminal", settings=settings)

        with caplog.at_level(logging.ERROR, logger="showcase.boundary"):
            boundary.render(explode)

        messages = [r.getMessage() for r in caplog.records if r.name == "showcase.boundary"]
        assert any(m.startswith("[DemoError]") and "kaboom" in m and "terminal" in m for m in messages)

    def test_development_fallback_surfaces_error(self, settings):
        boundary = ErrorBoundary(settings=settings)
        view = boundary.render(explode)
        assert view.error == "kaboom"

    def test_production_is_silent(self, production_settings, caplog):
        boundary = ErrorBoundary(settings=production_settings)

        with caplog.at_level(logging.DEBUG, logger="showcase.boundary"):
            view = boundary.render(explode)

        assert not [r for r in caplog.records if "[DemoError]" in r.getMessage()]
        assert view.error is None

    def test_hooks_receive_error_and_context(self, settings):
        hook = Mock()
        boundary = ErrorBoundary(settings=settings, on_error=[hook])

        boundary.render(explode)

        error, context = hook.call_args[0]
        assert isinstance(error, RuntimeError)
        assert context == "render"

    def test_failing_hook_is_ignored(self, settings):
        boundary = ErrorBoundary(settings=settings)
        boundary.add_hook(Mock(side_effect=ValueError("hook broke")))
        second = Mock()
        boundary.add_hook(second)

        boundary.capture(RuntimeError("x"), context="load")

        assert boundary.has_failed is True
        second.assert_called_once()

    def test_fallback_errors_propagate(self, settings):
        class BrokenFallbackBoundary(ErrorBoundary):
            def fallback(self):
                raise LookupError("fallback broke")

        boundary = BrokenFallbackBoundary(settings=settings)

        with pytest.raises(LookupError):
            boundary.render(explode)
