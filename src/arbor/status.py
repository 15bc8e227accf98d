"""Node status values."""

from __future__ import annotations

from enum import IntEnum


class Status(IntEnum):
    """The status of a node in a behavior tree.

    The integer values double as the wire encoding in
    :class:`arbor.message.NodeMessage`.
    """

    INITIALIZED = 0  # not ticked since creation or the last reset
    RUNNING = 1
    SUCCEEDED = 2
    FAILED = 3

    def is_done(self) -> bool:
        """Whether execution has finished, successfully or not."""
        return self in (Status.SUCCEEDED, Status.FAILED)

    @classmethod
    def from_result(cls, value: object) -> Status:
        """Convert a tick result to a Status, rejecting bools.

        ``True``/``False`` are ints, so ``Status(True)`` would quietly give
        ``RUNNING``.
        """
        if isinstance(value, bool):
            raise ValueError(f"expected a Status, got {value!r}")
        return cls(value)

    def __str__(self) -> str:
        return self.name.capitalize()
