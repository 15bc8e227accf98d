"""Nodes that tick their children in order for as long as they fail."""

from __future__ import annotations

from arbor.node import Node
from arbor.status import Status
from arbor.std_nodes.sequence import _Active, _Persistent


class _Selector(_Persistent):
    type_name = "Selector"
    proceed_on = Status.FAILED


class _ActiveSelector(_Active):
    type_name = "ActiveSelector"
    proceed_on = Status.FAILED


def Selector(*children: Node) -> Node:
    """Tick children in order, skipping those that already failed.

    Returns the first status that isn't ``FAILED``; fails when every child
    has failed (including when there are no children).
    """
    return Node(_Selector(children))


def ActiveSelector(*children: Node) -> Node:
    """Tick children from the first one on every tick.

    A higher-priority child that stops failing preempts lower-priority
    ones: every child after it is reset.
    """
    return Node(_ActiveSelector(children))
