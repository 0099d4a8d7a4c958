"""Tests for proxy-parent resolution across edit contexts."""
import logging

import pytest

from grab_rig import ExternalHint, InContext, Node, as_node_ref, resolve
from rig_helpers import find, make_node, teddy_bear


class TestResolve:
    def test_no_hint_uses_subtree_root(self):
        root = teddy_bear()
        assert resolve(None, root) is root

    def test_in_context_hint_returned_unchanged(self):
        root = teddy_bear()
        arm = find(root, "Arm")
        assert resolve(InContext(arm), root) is arm

    def test_subtree_root_itself_is_in_context(self):
        root = teddy_bear()
        assert resolve(InContext(root), root) is root

    def test_out_of_context_node_matched_by_name(self):
        """A live scene object maps to the template node with the same name."""
        template_root = teddy_bear()
        scene_arm = make_node("Arm")
        make_node("SceneRoot", children=(scene_arm,))

        resolved = resolve(InContext(scene_arm), template_root)

        assert resolved is find(template_root, "Arm")
        assert resolved is not scene_arm

    def test_external_hint_matched_by_name(self):
        root = teddy_bear()
        assert resolve(ExternalHint("Collider"), root) is find(root, "Collider")

    def test_miss_falls_back_to_root_silently(self, caplog):
        root = teddy_bear()
        with caplog.at_level(logging.WARNING, logger="grab-rig"):
            resolved = resolve(ExternalHint("Interaction Root"), root)
        assert resolved is root
        assert caplog.records == []

    def test_in_context_node_outside_subtree_falls_back(self):
        template_root = teddy_bear()
        stranger = make_node("Stranger")
        assert resolve(InContext(stranger), template_root) is template_root

    def test_name_collision_first_pre_order_match(self):
        """Several nodes share the name; resolution takes the first one visited.

        Only pre-order position decides; no other tie-break exists.
        """
        shallow = make_node("Anchor")
        deep = make_node("Anchor")
        root = make_node("Root", children=(make_node("Group", children=(deep,)), shallow))

        assert resolve(ExternalHint("Anchor"), root) is deep

    def test_resolution_is_scoped_to_the_subtree(self):
        outside = make_node("Anchor")
        subtree = make_node("Sub")
        make_node("Root", children=(subtree, outside))

        assert resolve(ExternalHint("Anchor"), subtree) is subtree


class TestAsNodeRef:
    def test_none(self):
        assert as_node_ref(None) is None

    def test_node_becomes_in_context(self):
        node = Node("Arm")
        ref = as_node_ref(node)
        assert isinstance(ref, InContext)
        assert ref.node is node
        assert ref.name == "Arm"

    def test_string_becomes_external_hint(self):
        assert as_node_ref("  Interaction Root ") == ExternalHint("Interaction Root")

    def test_blank_string_means_no_hint(self):
        assert as_node_ref("   ") is None

    def test_refs_pass_through(self):
        hint = ExternalHint("Arm")
        assert as_node_ref(hint) is hint

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            as_node_ref(42)
