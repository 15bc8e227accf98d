"""Decorators that rerun their child."""

from __future__ import annotations

from typing import Any

from arbor.node import Node
from arbor.status import Status
from arbor.std_nodes.decorator import _LimitedAttempts


class _Repeat(_LimitedAttempts):
    type_name = "Repeat"

    def tick(self, world: Any) -> Status:
        status = self._child.tick(world)
        if status.is_done() and self._record_attempt():
            return Status.SUCCEEDED
        return Status.RUNNING


class _UntilFail(_LimitedAttempts):
    type_name = "UntilFail"

    def tick(self, world: Any) -> Status:
        status = self._child.tick(world)
        if status == Status.FAILED:
            return Status.SUCCEEDED
        if status.is_done() and self._record_attempt():
            return Status.FAILED
        return Status.RUNNING


class _UntilSuccess(_LimitedAttempts):
    type_name = "UntilSuccess"

    def tick(self, world: Any) -> Status:
        status = self._child.tick(world)
        if status == Status.SUCCEEDED:
            return Status.SUCCEEDED
        if status.is_done() and self._record_attempt():
            return Status.FAILED
        return Status.RUNNING


def Repeat(child: Node, limit: int | None = None) -> Node:
    """Rerun *child* regardless of its result.

    Without a *limit* the node never completes.  With one, it succeeds after
    the child has completed *limit* times.
    """
    return Node(_Repeat(child, limit))


def UntilFail(child: Node, limit: int | None = None) -> Node:
    """Rerun *child* until it fails, then succeed.

    With a *limit*, fail once the child has completed that many times
    without failing.
    """
    return Node(_UntilFail(child, limit))


def UntilSuccess(child: Node, limit: int | None = None) -> Node:
    """Rerun *child* until it succeeds.

    With a *limit*, fail once the child has completed that many times
    without succeeding.
    """
    return Node(_UntilSuccess(child, limit))
