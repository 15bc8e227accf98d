"""Nodes that tick their children in parallel."""

from __future__ import annotations

from typing import Any, Iterable

from arbor.errors import InvalidNodeError
from arbor.node import Node, Tickable
from arbor.status import Status


class _Parallel(Tickable):
    type_name = "Parallel"

    def __init__(self, required_successes: int, children: Iterable[Node]):
        if isinstance(required_successes, bool) or not isinstance(required_successes, int):
            raise InvalidNodeError(
                f"required_successes must be an int, got {required_successes!r}"
            )
        if required_successes < 0:
            raise InvalidNodeError(
                f"required_successes must be non-negative, got {required_successes}"
            )
        self._required = required_successes
        self._children = list(children)

    def tick(self, world: Any) -> Status:
        successes = 0
        failures = 0

        for child in self._children:
            # Completed children keep their result; ticking them would restart them
            status = child.status if child.status.is_done() else child.tick(world)
            if status == Status.SUCCEEDED:
                successes += 1
            elif status == Status.FAILED:
                failures += 1

        if successes >= self._required:
            return Status.SUCCEEDED
        if failures + self._required > len(self._children):
            return Status.FAILED
        return Status.RUNNING

    def reset(self) -> None:
        for child in self._children:
            child.reset()

    def children(self) -> list[Node]:
        return list(self._children)


def Parallel(required_successes: int, *children: Node) -> Node:
    """Tick every unfinished child on each tick.

    Succeeds once at least *required_successes* children have succeeded and
    fails as soon as that is no longer possible.  Children that complete
    early are not ticked again until the node is reset.
    """
    return Node(_Parallel(required_successes, children))
