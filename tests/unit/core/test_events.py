"""Unit tests for the lifecycle event hub."""

import logging
from unittest.mock import MagicMock

import pytest

from solclean.core.events import BuildAction, BuildScope, EventHub


class TestBuildFinished:
    """Tests for build-finished dispatch."""

    def test_emit_calls_handlers_with_scope_and_action(self) -> None:
        """Handlers receive the scope and action."""
        hub = EventHub()
        handler = MagicMock()
        hub.subscribe_build_finished(handler)

        hub.emit_build_finished(BuildScope.WORKSPACE, BuildAction.CLEAN)

        handler.assert_called_once_with(BuildScope.WORKSPACE, BuildAction.CLEAN)

    def test_subscribe_twice_registers_once(self) -> None:
        """Duplicate subscriptions are ignored."""
        hub = EventHub()
        handler = MagicMock()
        hub.subscribe_build_finished(handler)
        hub.subscribe_build_finished(handler)

        hub.emit_build_finished(BuildScope.PROJECT, BuildAction.BUILD)

        assert hub.build_finished_subscribers() == 1
        handler.assert_called_once()

    def test_unsubscribe(self) -> None:
        """An unsubscribed handler is no longer called."""
        hub = EventHub()
        handler = MagicMock()
        hub.subscribe_build_finished(handler)
        hub.unsubscribe_build_finished(handler)

        hub.emit_build_finished(BuildScope.WORKSPACE, BuildAction.CLEAN)

        handler.assert_not_called()
        assert hub.build_finished_subscribers() == 0

    def test_unsubscribe_unknown_handler_is_noop(self) -> None:
        """Removing a handler that was never added does nothing."""
        EventHub().unsubscribe_build_finished(MagicMock())

    def test_handler_may_unsubscribe_during_dispatch(self) -> None:
        """Dispatch iterates over a copy of the handler list."""
        hub = EventHub()
        second = MagicMock()

        def first(scope: BuildScope, action: BuildAction) -> None:
            hub.unsubscribe_build_finished(first)

        hub.subscribe_build_finished(first)
        hub.subscribe_build_finished(second)

        hub.emit_build_finished(BuildScope.WORKSPACE, BuildAction.CLEAN)

        second.assert_called_once()
        assert hub.build_finished_subscribers() == 1

    def test_failing_handler_does_not_stop_others(self, caplog: pytest.LogCaptureFixture) -> None:
        """A raising handler is logged and the next one still runs."""
        hub = EventHub()
        broken = MagicMock(side_effect=RuntimeError("boom"))
        healthy = MagicMock()
        hub.subscribe_build_finished(broken)
        hub.subscribe_build_finished(healthy)

        with caplog.at_level(logging.ERROR, logger="solclean.core.events"):
            hub.emit_build_finished(BuildScope.WORKSPACE, BuildAction.CLEAN)

        healthy.assert_called_once()
        assert "handler" in caplog.text


class TestWorkspaceClosing:
    """Tests for workspace-closing dispatch."""

    def test_emit_and_unsubscribe(self) -> None:
        """Handlers are called without arguments until unsubscribed."""
        hub = EventHub()
        handler = MagicMock()
        hub.subscribe_workspace_closing(handler)

        hub.emit_workspace_closing()
        hub.unsubscribe_workspace_closing(handler)
        hub.emit_workspace_closing()

        handler.assert_called_once_with()
        assert hub.workspace_closing_subscribers() == 0

    def test_failing_handler_is_contained(self) -> None:
        """A raising handler does not propagate."""
        hub = EventHub()
        hub.subscribe_workspace_closing(MagicMock(side_effect=OSError("gone")))

        hub.emit_workspace_closing()
