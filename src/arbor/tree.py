"""The behavior tree container and its tick loop.

Usage::

    from arbor import BehaviorTree, Status
    from arbor.std_nodes import Sequence, Condition, Action

    tree = BehaviorTree(Sequence(Condition(is_ready), Action(do_work)))
    result = tree.run(10.0, world)          # tick at 10 Hz until done
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable

from arbor.config import settings
from arbor.errors import TickLimitExceeded
from arbor.node import Node
from arbor.status import Status

logger = logging.getLogger(__name__)

Hook = Callable[["BehaviorTree"], None]


class BehaviorTree:
    """Owns the root node and drives it with ticks."""

    def __init__(self, root: Node):
        self.root = root

    @property
    def status(self) -> Status:
        return self.root.status

    def tick(self, world: Any) -> Status:
        """Tick the root node once."""
        return self.root.tick(world)

    def reset(self) -> None:
        self.root.reset()

    # ── Run loops ─────────────────────────────────────────────────────────

    def run(
        self,
        freq: float,
        world: Any,
        hook: Hook | None = None,
        max_ticks: int | None = None,
    ) -> Status:
        """Tick the tree at *freq* Hz until the root completes.

        A non-positive *freq* ticks as fast as possible.  *hook* is called
        with the tree after every tick.  When *max_ticks* (or
        ``ARBOR_MAX_TICKS``) is reached first, :class:`TickLimitExceeded`
        is raised; a non-positive *max_ticks* means unlimited.
        """
        period = self._period(freq)
        limit = self._limit(max_ticks)
        logger.info("Running tree %s at %s", self.root.name, _describe_freq(freq))

        ticks = 0
        while True:
            started = time.monotonic()
            status = self._tick_once(world, hook)
            ticks += 1
            if status.is_done():
                break
            self._check_limit(ticks, limit)
            time.sleep(self._remaining(period, started))

        logger.info("Tree %s finished with %s after %d ticks", self.root.name, status, ticks)
        return status

    async def arun(
        self,
        freq: float,
        world: Any,
        hook: Hook | None = None,
        max_ticks: int | None = None,
    ) -> Status:
        """Like :meth:`run`, but yields to the event loop between ticks."""
        period = self._period(freq)
        limit = self._limit(max_ticks)
        logger.info("Running tree %s (async) at %s", self.root.name, _describe_freq(freq))

        ticks = 0
        while True:
            started = time.monotonic()
            status = self._tick_once(world, hook)
            ticks += 1
            if status.is_done():
                break
            self._check_limit(ticks, limit)
            await asyncio.sleep(self._remaining(period, started))

        logger.info("Tree %s finished with %s after %d ticks", self.root.name, status, ticks)
        return status

    # ── Internals ─────────────────────────────────────────────────────────

    def _tick_once(self, world: Any, hook: Hook | None) -> Status:
        status = self.tick(world)
        if hook is not None:
            hook(self)
        return status

    @staticmethod
    def _period(freq: float) -> float:
        return 1.0 / freq if freq > 0 else 0.0

    @staticmethod
    def _limit(max_ticks: int | None) -> int | None:
        if max_ticks is None:
            return settings.max_ticks
        # Same convention as ARBOR_MAX_TICKS: non-positive means unlimited
        return max_ticks if max_ticks > 0 else None

    @staticmethod
    def _check_limit(ticks: int, limit: int | None) -> None:
        if limit is not None and ticks >= limit:
            raise TickLimitExceeded(ticks)

    @staticmethod
    def _remaining(period: float, started: float) -> float:
        elapsed = time.monotonic() - started
        if period and elapsed > period:
            logger.debug("Tick overran its period by %.4fs", elapsed - period)
        return max(0.0, period - elapsed)

    def __str__(self) -> str:
        return str(self.root)

    def __repr__(self) -> str:
        return f"<BehaviorTree root={self.root!r}>"


def _describe_freq(freq: float) -> str:
    return f"{freq:g} Hz" if freq > 0 else "full speed"
