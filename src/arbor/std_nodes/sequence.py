"""Nodes that tick their children in order for as long as they succeed.

``Sequence`` remembers progress: children that already succeeded are not
ticked again until the sequence itself is reset.  ``ActiveSequence``
re-evaluates every child from the start on each tick, which makes it
suitable for guarding a running action with conditions.
"""

from __future__ import annotations

from typing import Any, Iterable

from arbor.node import Node, Tickable
from arbor.status import Status


class _Composite(Tickable):
    """Shared plumbing for nodes with an ordered list of children.

    ``proceed_on`` is the child status that lets the node move on to the
    next child; the node returns ``proceed_on`` if every child yields it.
    """

    proceed_on: Status = Status.SUCCEEDED

    def __init__(self, children: Iterable[Node]):
        self._children = list(children)

    def reset(self) -> None:
        for child in self._children:
            child.reset()

    def children(self) -> list[Node]:
        return list(self._children)


class _Persistent(_Composite):
    def tick(self, world: Any) -> Status:
        for child in self._children:
            if child.status == self.proceed_on:
                continue
            status = child.tick(world)
            if status != self.proceed_on:
                return status
        return self.proceed_on


class _Active(_Composite):
    def tick(self, world: Any) -> Status:
        result = self.proceed_on
        for child in self._children:
            if result == self.proceed_on:
                result = child.tick(world)
            else:
                # Preempt anything left running further down the list
                child.reset()
        return result


class _Sequence(_Persistent):
    type_name = "Sequence"
    proceed_on = Status.SUCCEEDED


class _ActiveSequence(_Active):
    type_name = "ActiveSequence"
    proceed_on = Status.SUCCEEDED


def Sequence(*children: Node) -> Node:
    """Tick children in order, skipping those that already succeeded.

    Returns the first status that isn't ``SUCCEEDED``; succeeds when every
    child has succeeded (including when there are no children).
    """
    return Node(_Sequence(children))


def ActiveSequence(*children: Node) -> Node:
    """Tick children from the first one on every tick.

    Once a child does not succeed, every child after it is reset and that
    child's status is returned.
    """
    return Node(_ActiveSequence(children))
