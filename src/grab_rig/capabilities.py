"""Capability kinds and the reflective field contract.

A capability is a tagged record attached to exactly one node. Its data lives in a
serialized field bag so templates written against an older or newer capability shape
still load; the reconciler looks fields up by name and treats a missing field as a
schema mismatch instead of crashing.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from .errors import SchemaMismatchError

if TYPE_CHECKING:
    from .graph import Node


class CapabilityKind(str, Enum):
    """Closed set of capability kinds a node can carry."""
    GRABBABLE = "Grabbable"
    STANDARD_INTERACTABLE = "StandardInteractable"
    TOUCH_INTERACTABLE = "TouchInteractable"
    PHYSICS_JOINT_TRANSFORMER = "PhysicsJointTransformer"
    PHYSICAL_BODY = "PhysicalBody"


# Single-hand interactable family; StandardInteractable and TouchInteractable are
# mutually exclusive on one node.
HAND_GRAB_INTERACTABLES = frozenset({
    CapabilityKind.STANDARD_INTERACTABLE,
    CapabilityKind.TOUCH_INTERACTABLE,
})

# Serialized field names
GRABBABLE_TRANSFORMER_FIELD = "one_grab_transformer"
GRABBABLE_BODY_FIELD = "rigidbody"
TRANSFORMER_ROOT_FIELD = "rigidbodies_root"
TRANSFORMER_KINEMATIC_FIELD = "is_kinematic_grab"

# Field set a freshly created capability starts with.
DEFAULT_FIELDS: dict[CapabilityKind, dict[str, Any]] = {
    CapabilityKind.GRABBABLE: {
        GRABBABLE_TRANSFORMER_FIELD: None,
        GRABBABLE_BODY_FIELD: None,
    },
    CapabilityKind.STANDARD_INTERACTABLE: {},
    CapabilityKind.TOUCH_INTERACTABLE: {},
    CapabilityKind.PHYSICS_JOINT_TRANSFORMER: {
        TRANSFORMER_ROOT_FIELD: None,
        TRANSFORMER_KINEMATIC_FIELD: True,
    },
    CapabilityKind.PHYSICAL_BODY: {},
}


@dataclass(frozen=True)
class FieldHandle:
    """Typed view onto one serialized field of a capability."""
    capability: "Capability"
    name: str

    @property
    def value(self) -> Any:
        return self.capability.fields[self.name]

    def assign(self, value: Any) -> None:
        """Write the field without recording the edit."""
        self.capability.fields[self.name] = value


@dataclass(eq=False)
class Capability:
    kind: CapabilityKind
    fields: dict[str, Any] = field(default_factory=dict)
    node: "Node | None" = field(default=None, repr=False)

    @classmethod
    def create(cls, kind: CapabilityKind | str) -> "Capability":
        kind = CapabilityKind(kind)
        return cls(kind=kind, fields=dict(DEFAULT_FIELDS[kind]))

    @property
    def is_hand_grab_interactable(self) -> bool:
        return self.kind in HAND_GRAB_INTERACTABLES

    def find_field(self, name: str) -> FieldHandle | None:
        """Return a handle for ``name``, or None when this instance has no such field."""
        if name not in self.fields:
            return None
        return FieldHandle(self, name)

    def require_field(self, name: str) -> FieldHandle:
        handle = self.find_field(name)
        if handle is None:
            raise SchemaMismatchError(
                self.kind.value,
                name,
                self.node.path if self.node is not None else None,
            )
        return handle

    def __repr__(self) -> str:
        owner = self.node.name if self.node is not None else None
        return f"Capability({self.kind.value!r}, node={owner!r})"
