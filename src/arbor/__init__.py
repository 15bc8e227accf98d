"""Arbor: behavior trees for Python.

Based on behavior trees as described by Marzinotto et al., "Towards a
unified behavior trees framework for robot control" (ICRA 2014).
"""

from arbor.errors import (
    ActionError,
    ArborError,
    InvalidNodeError,
    TickLimitExceeded,
    TreeDefinitionError,
    WorkflowError,
)
from arbor.message import NodeMessage
from arbor.node import Node, Tickable
from arbor.status import Status
from arbor.tree import BehaviorTree

__version__ = "0.1.0"

__all__ = [
    "ActionError",
    "ArborError",
    "BehaviorTree",
    "InvalidNodeError",
    "Node",
    "NodeMessage",
    "Status",
    "Tickable",
    "TickLimitExceeded",
    "TreeDefinitionError",
    "WorkflowError",
]
