"""Nodes that have a single child and modify its behavior in some way."""

from __future__ import annotations

from typing import Any, Callable

from arbor.errors import InvalidNodeError
from arbor.node import Node, Tickable
from arbor.status import Status


class _SingleChild(Tickable):
    def __init__(self, child: Node):
        if not isinstance(child, Node):
            raise InvalidNodeError(f"{self.type_name} child must be a Node, got {child!r}")
        self._child = child

    def reset(self) -> None:
        self._child.reset()

    def children(self) -> list[Node]:
        return [self._child]


class _LimitedAttempts(_SingleChild):
    """A single-child node that counts how many times its child completed."""

    def __init__(self, child: Node, limit: int | None = None):
        super().__init__(child)
        if limit is not None and (
            isinstance(limit, bool) or not isinstance(limit, int) or limit < 1
        ):
            raise InvalidNodeError(
                f"{self.type_name} limit must be a positive int, got {limit!r}"
            )
        self._limit = limit
        self._attempts = 0

    @property
    def attempts(self) -> int:
        return self._attempts

    def _record_attempt(self) -> bool:
        """Count a completed attempt; True once the limit is reached."""
        self._attempts += 1
        return self._limit is not None and self._attempts >= self._limit

    def reset(self) -> None:
        self._attempts = 0
        super().reset()


class _Decorator(_SingleChild):
    type_name = "Decorator"

    def __init__(self, child: Node, func: Callable[[Status, Any], Status]):
        super().__init__(child)
        self._func = func

    def tick(self, world: Any) -> Status:
        return Status.from_result(self._func(self._child.tick(world), world))


class _Invert(_SingleChild):
    type_name = "Invert"

    def tick(self, world: Any) -> Status:
        status = self._child.tick(world)
        if status == Status.SUCCEEDED:
            return Status.FAILED
        if status == Status.FAILED:
            return Status.SUCCEEDED
        return status


def Decorator(child: Node, func: Callable[[Status, Any], Status]) -> Node:
    """Tick *child* and return ``func(child_status, world)``.

    The child may be ticked to completion several times before the
    decorator itself is done, depending on what *func* returns.
    """
    return Node(_Decorator(child, func))


def Invert(child: Node) -> Node:
    """Swap ``SUCCEEDED`` and ``FAILED`` from *child*; ``RUNNING`` passes through."""
    return Node(_Invert(child))
