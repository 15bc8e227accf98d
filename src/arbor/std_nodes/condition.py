"""Nodes which query the state of the world."""

from __future__ import annotations

from typing import Any, Callable

from arbor.node import Node, Tickable
from arbor.status import Status


class _Condition(Tickable):
    type_name = "Condition"

    def __init__(self, predicate: Callable[[Any], Any]):
        self._predicate = predicate

    def tick(self, world: Any) -> Status:
        return Status.SUCCEEDED if self._predicate(world) else Status.FAILED

    def reset(self) -> None:
        pass


def Condition(predicate: Callable[[Any], Any]) -> Node:
    """A node that succeeds when ``predicate(world)`` is truthy, else fails.

    The predicate should only read the world; it is evaluated on every tick
    and never returns ``RUNNING``.
    """
    return Node(_Condition(predicate))
