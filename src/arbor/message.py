"""Serializable snapshot of a node and its subtree.

Used to publish tree state to monitoring tools::

    payload = tree.root.to_message().model_dump_json()
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from arbor.status import Status


class NodeMessage(BaseModel):
    """Wire representation of a single node and, recursively, its children."""

    name: str
    type_name: str
    status: int = Field(ge=int(Status.INITIALIZED), le=int(Status.FAILED))
    children: list[NodeMessage] = []

    @property
    def status_enum(self) -> Status:
        return Status(self.status)

    def walk(self):
        """Yield this message and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()
