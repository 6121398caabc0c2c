"""Workspace lifecycle notifications.

A small observer hub delivering build-finished and workspace-closing
notifications to subscribed handlers. Handlers can be attached and
detached at any time, including from inside another handler.
"""

import logging
import threading
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger(__name__)


class BuildScope(str, Enum):
    """Scope of a finished build action."""

    WORKSPACE = "workspace"
    PROJECT = "project"
    SELECTION = "selection"


class BuildAction(str, Enum):
    """Kind of a finished build action."""

    BUILD = "build"
    REBUILD = "rebuild"
    CLEAN = "clean"
    DEPLOY = "deploy"


BuildFinishedHandler = Callable[[BuildScope, BuildAction], None]
WorkspaceClosingHandler = Callable[[], None]


class EventHub:
    """Dispatches lifecycle notifications to registered handlers.

    Subscribing the same handler twice registers it once. Emitting
    iterates over a copy of the handler list, so handlers may
    unsubscribe during dispatch. A failing handler is logged and does
    not prevent the remaining handlers from running.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._build_finished: list[BuildFinishedHandler] = []
        self._workspace_closing: list[WorkspaceClosingHandler] = []

    def subscribe_build_finished(self, handler: BuildFinishedHandler) -> None:
        with self._lock:
            if handler not in self._build_finished:
                self._build_finished.append(handler)

    def unsubscribe_build_finished(self, handler: BuildFinishedHandler) -> None:
        with self._lock:
            if handler in self._build_finished:
                self._build_finished.remove(handler)

    def subscribe_workspace_closing(self, handler: WorkspaceClosingHandler) -> None:
        with self._lock:
            if handler not in self._workspace_closing:
                self._workspace_closing.append(handler)

    def unsubscribe_workspace_closing(self, handler: WorkspaceClosingHandler) -> None:
        with self._lock:
            if handler in self._workspace_closing:
                self._workspace_closing.remove(handler)

    def emit_build_finished(self, scope: BuildScope, action: BuildAction) -> None:
        """Notify handlers that a build action finished."""
        with self._lock:
            handlers = list(self._build_finished)
        logger.debug(
            "build finished: scope=%s action=%s (%d handlers)", scope, action, len(handlers)
        )
        for handler in handlers:
            try:
                handler(scope, action)
            except Exception:
                logger.exception("Build-finished handler %r failed", handler)

    def emit_workspace_closing(self) -> None:
        """Notify handlers that the workspace is about to close."""
        with self._lock:
            handlers = list(self._workspace_closing)
        logger.debug("workspace closing (%d handlers)", len(handlers))
        for handler in handlers:
            try:
                handler()
            except Exception:
                logger.exception("Workspace-closing handler %r failed", handler)

    def build_finished_subscribers(self) -> int:
        with self._lock:
            return len(self._build_finished)

    def workspace_closing_subscribers(self) -> int:
        with self._lock:
            return len(self._workspace_closing)
