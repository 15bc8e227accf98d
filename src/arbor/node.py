"""Behavior tree nodes and the tick contract shared by all node types.

A :class:`Node` is a thin wrapper around a :class:`Tickable`, which holds
the actual logic.  The wrapper enforces the runtime rules every node obeys:

- A node that has run to completion (``SUCCEEDED`` or ``FAILED``) is reset
  before it is ticked again.
- Resetting a node that was never ticked does not touch its internals.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from arbor.message import NodeMessage
from arbor.status import Status

logger = logging.getLogger(__name__)


class Tickable(ABC):
    """The internal logic of a node.

    Internals are only ticked while the owning node is ``INITIALIZED`` or
    ``RUNNING``; they should never reset themselves after completing.
    """

    type_name: str = "Tickable"

    @abstractmethod
    def tick(self, world: Any) -> Status:
        """Advance the node's logic by one step and return its status."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Return to a state identical to a freshly constructed node.

        May be called in any state.
        """
        ...

    def children(self) -> list[Node]:
        """Child nodes, in tick order.  Leaves have none."""
        return []


class Node:
    """A node in a behavior tree.

    Constructors in :mod:`arbor.std_nodes` return ready-made nodes; custom
    logic is plugged in by wrapping a :class:`Tickable`::

        node = Node(MyTickable()).named("approach door")
    """

    def __init__(self, internals: Tickable, name: str | None = None):
        self._internals = internals
        self._name = name
        self._status = Status.INITIALIZED

    # ── Introspection ─────────────────────────────────────────────────────

    @property
    def status(self) -> Status:
        """The status returned by the most recent tick."""
        return self._status

    @property
    def name(self) -> str:
        return self._name if self._name is not None else self.type_name

    @property
    def type_name(self) -> str:
        return self._internals.type_name

    @property
    def internals(self) -> Tickable:
        return self._internals

    def children(self) -> list[Node]:
        return self._internals.children()

    def named(self, name: str | None) -> Node:
        """Set (or clear, with ``None``) this node's name and return the node."""
        if name is None:
            logger.debug("Removing name from %s", self.name)
        else:
            logger.debug("Renaming node from %s to %s", self.name, name)
        self._name = name
        return self

    # ── Tick contract ─────────────────────────────────────────────────────

    def tick(self, world: Any) -> Status:
        """Tick the node once, resetting it first if it already completed."""
        if self._status.is_done():
            self.reset()

        logger.debug("Ticking node %s", self.name)
        self._status = Status.from_result(self._internals.tick(world))
        return self._status

    def reset(self) -> None:
        """Reset the node to its freshly-constructed state."""
        if self._status == Status.INITIALIZED:
            return
        logger.debug("Resetting node %s (%s)", self.name, self._status)
        self._status = Status.INITIALIZED
        self._internals.reset()

    # ── Rendering ─────────────────────────────────────────────────────────

    def to_message(self) -> NodeMessage:
        """Snapshot this node and its subtree."""
        return NodeMessage(
            name=self.name,
            type_name=self.type_name,
            status=int(self._status),
            children=[child.to_message() for child in self.children()],
        )

    def __str__(self) -> str:
        parts = [f"{self.name}:( status = {str(self._status)}"]
        for child in self.children():
            parts.append(f", {child}")
        parts.append(" )")
        return "".join(parts)

    def __repr__(self) -> str:
        return f"<Node {self.name!r} type={self.type_name} status={self._status.name}>"
