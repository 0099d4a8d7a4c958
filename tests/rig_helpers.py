"""Builders for small node hierarchies used across the tests."""
from typing import Any

from grab_rig import Capability, CapabilityKind, Node
from grab_rig.template_store import dump_graph

GRABBABLE = CapabilityKind.GRABBABLE
STANDARD = CapabilityKind.STANDARD_INTERACTABLE
TOUCH = CapabilityKind.TOUCH_INTERACTABLE
TRANSFORMER = CapabilityKind.PHYSICS_JOINT_TRANSFORMER
BODY = CapabilityKind.PHYSICAL_BODY


def make_node(name: str, *kinds: CapabilityKind, children: tuple = ()) -> Node:
    node = Node(name)
    for kind in kinds:
        node.attach(Capability.create(kind))
    for child in children:
        node.add_child(child)
    return node


def find(root: Node, name: str) -> Node:
    node = root.find(name)
    assert node is not None, f"no node named {name!r} under {root.name!r}"
    return node


def kinds_of(node: Node) -> list[str]:
    return [c.kind.value for c in node.capabilities]


def snapshot(root: Node) -> dict[str, Any]:
    return dump_graph(root).model_dump(mode="json")


def teddy_bear() -> Node:
    """Grabbable body with a stray interactable on its collider and a grabbable arm.

    TeddyBear [Grabbable, TouchInteractable]
      Collider [StandardInteractable]
      Arm [Grabbable, StandardInteractable]
        Hand [TouchInteractable]
    """
    return make_node(
        "TeddyBear", GRABBABLE, TOUCH,
        children=(
            make_node("Collider", STANDARD),
            make_node("Arm", GRABBABLE, STANDARD, children=(
                make_node("Hand", TOUCH),
            )),
        ),
    )


def ragdoll() -> Node:
    """Character root with three physics limbs and an interaction anchor.

    Character
      Hips [PhysicalBody]
        Spine [PhysicalBody]
        Leg [PhysicalBody]
      Interaction Root
    """
    return make_node(
        "Character",
        children=(
            make_node("Hips", BODY, children=(
                make_node("Spine", BODY),
                make_node("Leg", BODY),
            )),
            make_node("Interaction Root"),
        ),
    )
