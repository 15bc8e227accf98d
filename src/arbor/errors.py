"""Exception hierarchy for Arbor."""

from __future__ import annotations


class ArborError(Exception):
    """Base class for every error raised by Arbor."""


class InvalidNodeError(ArborError, ValueError):
    """A node was constructed with invalid parameters."""


class ActionError(ArborError):
    """An ``Action`` task raised instead of returning a status."""

    def __init__(self, node_name: str, cause: BaseException):
        super().__init__(f"Action {node_name!r} failed: {cause!r}")
        self.node_name = node_name
        self.__cause__ = cause


class TickLimitExceeded(ArborError):
    """A tree run hit its tick limit before the root completed."""

    def __init__(self, ticks: int):
        super().__init__(f"Tree did not complete within {ticks} ticks")
        self.ticks = ticks


class TreeDefinitionError(ArborError, ValueError):
    """A declarative tree definition could not be built."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class WorkflowError(ArborError):
    """A CI workflow file could not be read or parsed."""
