"""Tests for capability kinds and reflective field access."""
import pytest

from grab_rig import Capability, CapabilityKind, SchemaMismatchError
from grab_rig.capabilities import (
    DEFAULT_FIELDS,
    GRABBABLE_BODY_FIELD,
    GRABBABLE_TRANSFORMER_FIELD,
    TRANSFORMER_KINEMATIC_FIELD,
    TRANSFORMER_ROOT_FIELD,
)
from rig_helpers import make_node


class TestCreate:
    def test_grabbable_starts_unwired(self):
        grabbable = Capability.create(CapabilityKind.GRABBABLE)
        assert grabbable.fields == {GRABBABLE_TRANSFORMER_FIELD: None, GRABBABLE_BODY_FIELD: None}
        assert grabbable.node is None

    def test_transformer_defaults_to_kinematic_grab(self):
        transformer = Capability.create(CapabilityKind.PHYSICS_JOINT_TRANSFORMER)
        assert transformer.fields[TRANSFORMER_KINEMATIC_FIELD] is True
        assert transformer.fields[TRANSFORMER_ROOT_FIELD] is None

    def test_accepts_kind_name(self):
        assert Capability.create("TouchInteractable").kind is CapabilityKind.TOUCH_INTERACTABLE

    def test_rejects_unknown_kind(self):
        with pytest.raises(ValueError):
            Capability.create("Rigidbody2D")

    def test_defaults_are_copied(self):
        transformer = Capability.create(CapabilityKind.PHYSICS_JOINT_TRANSFORMER)
        transformer.fields[TRANSFORMER_KINEMATIC_FIELD] = False
        assert DEFAULT_FIELDS[CapabilityKind.PHYSICS_JOINT_TRANSFORMER][TRANSFORMER_KINEMATIC_FIELD] is True


def test_hand_grab_family():
    assert Capability.create(CapabilityKind.STANDARD_INTERACTABLE).is_hand_grab_interactable
    assert Capability.create(CapabilityKind.TOUCH_INTERACTABLE).is_hand_grab_interactable
    assert not Capability.create(CapabilityKind.GRABBABLE).is_hand_grab_interactable
    assert not Capability.create(CapabilityKind.PHYSICAL_BODY).is_hand_grab_interactable


class TestFieldAccess:
    def test_find_field_reads_and_assigns(self):
        transformer = Capability.create(CapabilityKind.PHYSICS_JOINT_TRANSFORMER)
        handle = transformer.find_field(TRANSFORMER_KINEMATIC_FIELD)
        assert handle is not None
        assert handle.value is True
        handle.assign(False)
        assert transformer.fields[TRANSFORMER_KINEMATIC_FIELD] is False

    def test_find_field_missing_returns_none(self):
        grabbable = Capability(kind=CapabilityKind.GRABBABLE, fields={})
        assert grabbable.find_field(GRABBABLE_TRANSFORMER_FIELD) is None

    def test_require_field_reports_kind_field_and_node(self):
        arm = make_node("Arm")
        body = make_node("Bear", children=(arm,))
        grabbable = arm.attach(Capability(kind=CapabilityKind.GRABBABLE, fields={}))

        with pytest.raises(SchemaMismatchError) as excinfo:
            grabbable.require_field(GRABBABLE_TRANSFORMER_FIELD)

        assert excinfo.value.capability_kind == "Grabbable"
        assert excinfo.value.field_name == GRABBABLE_TRANSFORMER_FIELD
        assert excinfo.value.node_path == "Bear/Arm"
        assert "one_grab_transformer" in str(excinfo.value)
        assert body.children == [arm]

    def test_require_field_on_detached_capability(self):
        grabbable = Capability(kind=CapabilityKind.GRABBABLE, fields={})
        with pytest.raises(SchemaMismatchError) as excinfo:
            grabbable.require_field(GRABBABLE_BODY_FIELD)
        assert excinfo.value.node_path is None
