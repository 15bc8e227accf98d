"""Shared test fixtures for the Arbor test suite."""

from __future__ import annotations

import time
from typing import Any, Callable, Iterable

import pytest

from arbor.node import Node, Tickable
from arbor.status import Status


class CountedTick(Tickable):
    """Leaf that returns a fixed status and records how it was driven."""

    type_name = "CountedTick"

    def __init__(self, status: Status, *, forbid_tick: bool = False):
        self.result = status
        self.forbid_tick = forbid_tick
        self.ticks = 0
        self.resets = 0

    def tick(self, world: Any) -> Status:
        if self.forbid_tick:
            raise AssertionError("This node should not have been ticked")
        self.ticks += 1
        return self.result

    def reset(self) -> None:
        self.resets += 1


class ScriptedTick(Tickable):
    """Leaf that replays a fixed sequence of statuses, repeating the last one."""

    type_name = "ScriptedTick"

    def __init__(self, statuses: Iterable[Status]):
        self.statuses = list(statuses)
        self.ticks = 0
        self.resets = 0

    def tick(self, world: Any) -> Status:
        index = min(self.ticks, len(self.statuses) - 1)
        self.ticks += 1
        return self.statuses[index]

    def reset(self) -> None:
        self.resets += 1


@pytest.fixture
def counted() -> Callable[..., tuple[Node, CountedTick]]:
    """Factory returning ``(node, internals)`` for a constant-status leaf."""

    def make(status: Status, **kwargs: Any) -> tuple[Node, CountedTick]:
        internals = CountedTick(status, **kwargs)
        return Node(internals), internals

    return make


@pytest.fixture
def scripted() -> Callable[..., tuple[Node, ScriptedTick]]:
    """Factory returning ``(node, internals)`` for a scripted leaf."""

    def make(*statuses: Status) -> tuple[Node, ScriptedTick]:
        internals = ScriptedTick(statuses)
        return Node(internals), internals

    return make


@pytest.fixture
def tick_until_done() -> Callable[..., Status]:
    """Tick a node until it completes, failing the test after *timeout* seconds."""

    def run(node: Node, world: Any = None, timeout: float = 5.0) -> Status:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            status = node.tick(world)
            if status.is_done():
                return status
            time.sleep(0.005)
        raise AssertionError(f"{node.name} did not complete within {timeout}s")

    return run
