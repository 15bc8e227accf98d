"""Small example trees used by the CLI ``demo`` command and the docs."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

from arbor.node import Node
from arbor.status import Status
from arbor.std_nodes import Action, Condition, InlineAction, Sequence

INPUT_A = 5
INPUT_B = 7


@dataclass
class ArithmeticWorld:
    """World state for the add/subtract demo.

    ``Action`` tasks run on worker threads, so writes go through ``lock``.
    """

    add_res: int | None = None
    sub_res: int | None = None
    work_seconds: float = 1.0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


def do_add(world: ArithmeticWorld) -> Status:
    # Simulate a slow task
    time.sleep(world.work_seconds)
    with world.lock:
        world.add_res = INPUT_A + INPUT_B
    return Status.SUCCEEDED


def do_sub(world: ArithmeticWorld) -> Status:
    # Guarded by the preceding condition, so the result is non-negative
    with world.lock:
        world.sub_res = INPUT_B - INPUT_A
    return Status.SUCCEEDED


def arithmetic_tree() -> Node:
    """Add on a worker thread, check the operands, then subtract inline."""
    return Sequence(
        Action(do_add).named("add"),
        Condition(lambda _world: INPUT_B > INPUT_A).named("b > a"),
        InlineAction(do_sub).named("subtract"),
    )
