"""Build behavior trees from declarative (YAML / dict) definitions.

A definition is a nested mapping, one per node::

    type: Sequence
    name: fetch and check
    children:
      - type: Action
        fn: download
      - type: Condition
        fn: checksum_ok
      - type: UntilSuccess
        limit: 3
        child:
          type: InlineAction
          fn: upload

Leaf callables are looked up by ``fn`` in a registry supplied by the
caller, so definitions never execute arbitrary code.

Usage::

    from arbor.loader import load_tree

    tree = load_tree("tree.yaml", {"download": download, ...})
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from arbor import std_nodes
from arbor.errors import InvalidNodeError, TreeDefinitionError
from arbor.node import Node
from arbor.status import Status
from arbor.tree import BehaviorTree

logger = logging.getLogger(__name__)

Registry = Mapping[str, Callable[..., Any]]

_LEAVES: dict[str, Callable[[Callable], Node]] = {
    "Action": std_nodes.Action,
    "InlineAction": std_nodes.InlineAction,
    "Condition": std_nodes.Condition,
}
_COMPOSITES: dict[str, Callable[..., Node]] = {
    "Sequence": std_nodes.Sequence,
    "ActiveSequence": std_nodes.ActiveSequence,
    "Selector": std_nodes.Selector,
    "ActiveSelector": std_nodes.ActiveSelector,
}
_LIMITED: dict[str, Callable[..., Node]] = {
    "Repeat": std_nodes.Repeat,
    "UntilFail": std_nodes.UntilFail,
    "UntilSuccess": std_nodes.UntilSuccess,
}
_CONSTANTS: dict[str, Callable[..., Node]] = {
    "AlwaysSucceed": std_nodes.AlwaysSucceed,
    "AlwaysFail": std_nodes.AlwaysFail,
}

NODE_TYPES: frozenset[str] = frozenset(
    [*_LEAVES, *_COMPOSITES, *_LIMITED, *_CONSTANTS, "AlwaysRunning", "Invert", "Decorator", "Parallel"]
)


def load_tree(
    path: str | Path, registry: Registry, *, stub_missing: bool = False
) -> BehaviorTree:
    """Read a YAML tree definition from *path* and build it."""
    text = Path(path).read_text(encoding="utf-8")
    return loads_tree(text, registry, stub_missing=stub_missing)


def loads_tree(
    text: str, registry: Registry, *, stub_missing: bool = False
) -> BehaviorTree:
    """Build a tree from YAML *text*."""
    try:
        definition = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise TreeDefinitionError("root", f"invalid YAML: {exc}") from exc
    return BehaviorTree(build_node(definition, registry, stub_missing=stub_missing))


def build_tree(
    definition: Mapping[str, Any], registry: Registry, *, stub_missing: bool = False
) -> BehaviorTree:
    """Build a tree from an already-parsed definition mapping."""
    return BehaviorTree(build_node(definition, registry, stub_missing=stub_missing))


def build_node(
    definition: Any,
    registry: Registry,
    *,
    path: str = "root",
    stub_missing: bool = False,
) -> Node:
    """Recursively build a single node (and its subtree).

    With *stub_missing*, callables absent from *registry* are replaced by a
    stub that fails when ticked, which is enough to inspect a tree's shape.
    """
    if not isinstance(definition, Mapping):
        raise TreeDefinitionError(path, f"expected a mapping, got {type(definition).__name__}")

    node_type = definition.get("type")
    if not isinstance(node_type, str) or node_type not in NODE_TYPES:
        raise TreeDefinitionError(path, f"unknown node type {node_type!r}")

    def child_at(key: str) -> Node:
        if key not in definition:
            raise TreeDefinitionError(path, f"{node_type} requires '{key}'")
        return build_node(
            definition[key], registry, path=f"{path}.{key}", stub_missing=stub_missing
        )

    def children() -> list[Node]:
        items = definition.get("children", [])
        if not isinstance(items, list):
            raise TreeDefinitionError(path, "'children' must be a list")
        return [
            build_node(item, registry, path=f"{path}.children[{i}]", stub_missing=stub_missing)
            for i, item in enumerate(items)
        ]

    def resolve_fn() -> Callable[..., Any]:
        fn_name = definition.get("fn")
        if not isinstance(fn_name, str):
            raise TreeDefinitionError(path, f"{node_type} requires 'fn' naming a callable")
        if fn_name in registry:
            return registry[fn_name]
        if stub_missing:
            logger.debug("Stubbing missing callable %s at %s", fn_name, path)
            return _stub
        raise TreeDefinitionError(path, f"no callable named {fn_name!r} in registry")

    try:
        if node_type in _LEAVES:
            node = _LEAVES[node_type](resolve_fn())
        elif node_type in _COMPOSITES:
            node = _COMPOSITES[node_type](*children())
        elif node_type in _LIMITED:
            node = _LIMITED[node_type](child_at("child"), definition.get("limit"))
        elif node_type in _CONSTANTS:
            child = child_at("child") if "child" in definition else None
            node = _CONSTANTS[node_type](child)
        elif node_type == "AlwaysRunning":
            node = std_nodes.AlwaysRunning()
        elif node_type == "Invert":
            node = std_nodes.Invert(child_at("child"))
        elif node_type == "Decorator":
            node = std_nodes.Decorator(child_at("child"), resolve_fn())
        else:  # Parallel
            node = std_nodes.Parallel(definition.get("required_successes", 1), *children())
    except InvalidNodeError as exc:
        raise TreeDefinitionError(path, str(exc)) from exc

    name = definition.get("name")
    if name is not None:
        node.named(str(name))
    return node


def _stub(*_args: Any) -> Status:
    return Status.FAILED
