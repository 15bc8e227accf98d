"""Nodes that have a constant behavior."""

from __future__ import annotations

from typing import Any

from arbor.node import Node, Tickable
from arbor.status import Status


class _Constant(Tickable):
    """Returns a fixed status, optionally after running a child to completion."""

    result: Status = Status.RUNNING

    def __init__(self, child: Node | None = None):
        self._child = child

    def tick(self, world: Any) -> Status:
        if self._child is not None and not self._child.tick(world).is_done():
            return Status.RUNNING
        return self.result

    def reset(self) -> None:
        if self._child is not None:
            self._child.reset()

    def children(self) -> list[Node]:
        return [self._child] if self._child is not None else []


class _AlwaysSucceed(_Constant):
    type_name = "AlwaysSucceed"
    result = Status.SUCCEEDED


class _AlwaysFail(_Constant):
    type_name = "AlwaysFail"
    result = Status.FAILED


class _AlwaysRunning(Tickable):
    type_name = "AlwaysRunning"

    def tick(self, world: Any) -> Status:
        return Status.RUNNING

    def reset(self) -> None:
        pass


def AlwaysSucceed(child: Node | None = None) -> Node:
    """Succeeds immediately, or once *child* completes regardless of its result."""
    return Node(_AlwaysSucceed(child))


def AlwaysFail(child: Node | None = None) -> Node:
    """Fails immediately, or once *child* completes regardless of its result."""
    return Node(_AlwaysFail(child))


def AlwaysRunning() -> Node:
    """Never completes."""
    return Node(_AlwaysRunning())
