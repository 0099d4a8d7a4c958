"""Resolve a proxy-parent hint into a node that lives inside the edit context.

A hint is either a node already in the loaded hierarchy (``InContext``) or a name
carried over from somewhere else (``ExternalHint``), e.g. a live scene object picked
before the template was opened for editing. Hints are resolved once at the start of a
run; nothing past that point handles an unresolved reference.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from .graph import Node

logger = logging.getLogger("grab-rig")


@dataclass(frozen=True)
class InContext:
    node: Node

    @property
    def name(self) -> str:
        return self.node.name


@dataclass(frozen=True)
class ExternalHint:
    name: str


NodeRef = Union[InContext, ExternalHint]


def as_node_ref(value: NodeRef | Node | str | None) -> NodeRef | None:
    """Coerce a plain node or name into a reference. Empty strings mean no hint."""
    if value is None or isinstance(value, (InContext, ExternalHint)):
        return value
    if isinstance(value, Node):
        return InContext(value)
    if isinstance(value, str):
        name = value.strip()
        return ExternalHint(name) if name else None
    raise TypeError(f"Cannot use {type(value).__name__} as a node reference")


def resolve(hint: NodeRef | None, subtree_root: Node) -> Node:
    """Return the in-context node ``hint`` stands for, defaulting to ``subtree_root``.

    Nodes outside the subtree are matched by name; the first match in pre-order
    wins. A hint that matches nothing is dropped without error.
    """
    if hint is None:
        return subtree_root

    if isinstance(hint, InContext) and hint.node.is_child_of(subtree_root):
        return hint.node

    match = subtree_root.find(hint.name)
    if match is not None:
        return match

    logger.debug(
        "Proxy parent '%s' not found under '%s'; using '%s'",
        hint.name,
        subtree_root.name,
        subtree_root.name,
    )
    return subtree_root
