"""Commonly used behavior tree nodes."""

from arbor.std_nodes.action import Action, InlineAction
from arbor.std_nodes.condition import Condition
from arbor.std_nodes.constants import AlwaysFail, AlwaysRunning, AlwaysSucceed
from arbor.std_nodes.decorator import Decorator, Invert
from arbor.std_nodes.parallel import Parallel
from arbor.std_nodes.repeat import Repeat, UntilFail, UntilSuccess
from arbor.std_nodes.selector import ActiveSelector, Selector
from arbor.std_nodes.sequence import ActiveSequence, Sequence

__all__ = [
    "Action",
    "InlineAction",
    "Condition",
    "AlwaysFail",
    "AlwaysRunning",
    "AlwaysSucceed",
    "Decorator",
    "Invert",
    "Parallel",
    "Repeat",
    "UntilFail",
    "UntilSuccess",
    "ActiveSelector",
    "Selector",
    "ActiveSequence",
    "Sequence",
]
