"""Remove single-hand interactables that sit on passive children of a target node."""
from __future__ import annotations

import logging

from .capabilities import HAND_GRAB_INTERACTABLES, Capability, CapabilityKind
from .edit_log import EditLog
from .graph import Node, capabilities_in_children

logger = logging.getLogger("grab-rig")


def clean(target_node: Node, log: EditLog) -> list[tuple[Node, Capability]]:
    """Strip misplaced interactables below ``target_node``.

    An interactable on a descendant that also carries ``Grabbable`` belongs to a
    nested rig (an articulated limb, a detachable part) and is left alone.
    ``target_node``'s own capabilities are never touched.

    Returns ``(former_owner, capability)`` pairs for every removal.
    """
    removed: list[tuple[Node, Capability]] = []
    for capability in capabilities_in_children(target_node, HAND_GRAB_INTERACTABLES, include_root=False):
        owner = capability.node
        if owner is None or owner.has(CapabilityKind.GRABBABLE):
            continue
        log.remove_capability(capability)
        logger.debug("Removed misplaced %s from '%s'", capability.kind.value, owner.path)
        removed.append((owner, capability))
    return removed
