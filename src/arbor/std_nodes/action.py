"""Nodes that perform work and modify the world."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, wait
from typing import Any, Callable

from arbor.config import settings
from arbor.errors import ActionError
from arbor.node import Node, Tickable
from arbor.status import Status

logger = logging.getLogger(__name__)

Task = Callable[[Any], Status]


def _task_label(task: Callable) -> str:
    return getattr(task, "__name__", type(task).__name__)


class _ThreadedAction(Tickable):
    """Runs a task on a worker thread and polls it on every tick.

    The world object is handed to the worker as-is, so any state shared
    with other nodes must be synchronised by the caller (e.g. a lock held
    inside the task).
    """

    type_name = "Action"

    def __init__(self, task: Task):
        self._task = task
        self._future: Future | None = None

    def _start(self, world: Any) -> None:
        future: Future = Future()
        future.set_running_or_notify_cancel()

        def runner() -> None:
            try:
                future.set_result(self._task(world))
            except BaseException as exc:
                future.set_exception(exc)

        thread = threading.Thread(
            target=runner,
            name=f"arbor-action-{_task_label(self._task)}",
            daemon=True,
        )
        self._future = future
        thread.start()
        logger.debug("Started action %s", _task_label(self._task))

    def tick(self, world: Any) -> Status:
        if self._future is None:
            self._start(world)
            return Status.RUNNING

        if not self._future.done():
            return Status.RUNNING

        future, self._future = self._future, None
        exc = future.exception()
        if exc is not None:
            raise ActionError(_task_label(self._task), exc)

        try:
            status = Status.from_result(future.result())
        except ValueError as exc:
            raise ActionError(_task_label(self._task), exc) from exc

        # A task that is not done yet gets rerun on the next tick
        return status

    def reset(self) -> None:
        if self._future is None:
            return

        future, self._future = self._future, None
        timeout = settings.action_join_timeout
        done, _ = wait([future], timeout=timeout)
        if not done:
            logger.warning(
                "Action %s still running after %.2fs; detaching worker thread",
                _task_label(self._task),
                timeout,
            )
        elif future.exception() is not None:
            logger.debug(
                "Discarding error from action %s on reset: %r",
                _task_label(self._task),
                future.exception(),
            )


class _InlineAction(Tickable):
    type_name = "InlineAction"

    def __init__(self, task: Task):
        self._task = task

    def tick(self, world: Any) -> Status:
        return Status.from_result(self._task(world))

    def reset(self) -> None:
        pass


def Action(task: Task) -> Node:
    """A node that runs *task* in a separate thread.

    The first tick starts ``task(world)`` and returns ``RUNNING``; later ticks
    keep returning ``RUNNING`` until the task finishes, after which its
    return value becomes the node's status.  If the task returns ``RUNNING``
    or ``INITIALIZED`` it is started again on the following tick.

    Resetting the node blocks until any in-flight task finishes (bounded by
    ``ARBOR_ACTION_JOIN_TIMEOUT`` when set), so a reset node never has a
    stale worker writing to the world.

    Use this for long-running work; use :func:`InlineAction` for quick
    updates that can run inside the tick.
    """
    return Node(_ThreadedAction(task))


def InlineAction(task: Task) -> Node:
    """A node that calls ``task(world)`` synchronously on every tick."""
    return Node(_InlineAction(task))
