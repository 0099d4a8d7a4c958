"""Bring nodes into the canonical grab-rig configuration.

Two passes share the same ensure/wire steps:

``fix``
    Opens a template, finds every node already marked ``Grabbable``, removes
    misplaced interactables from their children, swaps ``TouchInteractable`` for
    ``StandardInteractable`` and wires a ``PhysicsJointTransformer`` anchored at the
    proxy parent. The template is written back as a whole.

``build``
    Walks a live hierarchy, turns every node with a ``PhysicalBody`` into a grab
    target and leaves kinematic grab off so the limb hangs from a physics joint.
    Nothing is persisted; the caller decides.

Both passes are idempotent: every add is existence-checked and field writes that
would not change a value are skipped. A capability missing a field is reported for
that node only and the pass moves on.
"""
from __future__ import annotations

import logging
import os

from .capabilities import (
    GRABBABLE_BODY_FIELD,
    GRABBABLE_TRANSFORMER_FIELD,
    TRANSFORMER_KINEMATIC_FIELD,
    TRANSFORMER_ROOT_FIELD,
    Capability,
    CapabilityKind,
)
from .cleanup import clean
from .edit_log import EditLog
from .errors import ConfigurationError, SchemaMismatchError
from .graph import Node, nodes_with
from .models import Report, SchemaMismatch
from .references import NodeRef, as_node_ref, resolve
from .template_store import close_template, open_template, save_template

logger = logging.getLogger("grab-rig")

LOG_PREFIX = "Grab Rig"


class Reconciler:
    """Runs reconciliation passes and keeps their edit log for undo."""

    def __init__(self, log: EditLog | None = None):
        self.log = log if log is not None else EditLog()

    # ------------------------------------------------------------------
    # Fix pass
    # ------------------------------------------------------------------

    def fix(
        self,
        template: str | os.PathLike[str] | None,
        parent_hint: NodeRef | Node | str | None = None,
    ) -> Report:
        if template is None or (isinstance(template, str) and not template.strip()):
            raise ConfigurationError("Please assign a template first.")

        context = open_template(template)
        report = Report(operation="fix", target=str(context.path))
        start = self.log.current_sequence
        try:
            self.log.register_hierarchy(context.root)
            proxy_parent = resolve(as_node_ref(parent_hint), context.root)
            report.proxy_parent = proxy_parent.path

            targets = nodes_with(context.root, CapabilityKind.GRABBABLE)
            if not targets:
                self._warn(report, "No 'Grabbable' components found in the template.")
                return report

            for node in targets:
                self._info(report, f"Processing '{node.name}'...")
                for owner, capability in clean(node, self.log):
                    self._info(
                        report,
                        f"Removing misplaced '{capability.kind.value}' from child "
                        f"'{owner.name}' (No Grabbable found on child).",
                    )
                self._fix_node(node, proxy_parent, report)
                report.processed += 1

            save_template(context)
            report.persisted = True
        except Exception:
            logger.error(
                "%s: fix of '%s' failed; reverting %d edit(s)",
                LOG_PREFIX, context.path, self.log.current_sequence - start,
            )
            self.log.undo_to(start)
            raise
        finally:
            close_template(context)

        report.edit_count = self.log.current_sequence - start
        self._info(report, "Template fixing process complete!")
        return report

    def _fix_node(self, node: Node, proxy_parent: Node, report: Report) -> None:
        for touch in node.get_all(CapabilityKind.TOUCH_INTERACTABLE):
            self._info(report, f"Removing conflicting 'TouchInteractable' from '{node.name}'.")
            self.log.remove_capability(touch)

        self._ensure(node, CapabilityKind.STANDARD_INTERACTABLE, report)
        transformer = self._ensure(node, CapabilityKind.PHYSICS_JOINT_TRANSFORMER, report)

        try:
            root_field = transformer.require_field(TRANSFORMER_ROOT_FIELD)
            links = [
                grabbable.require_field(GRABBABLE_TRANSFORMER_FIELD)
                for grabbable in node.get_all(CapabilityKind.GRABBABLE)
            ]
        except SchemaMismatchError as exc:
            self._schema_error(report, node, exc)
            return

        self.log.write_field(root_field, proxy_parent)
        for link in links:
            self.log.write_field(link, transformer)
        self._info(report, f"Linked physics transformer on '{node.name}'.")

    # ------------------------------------------------------------------
    # Build pass
    # ------------------------------------------------------------------

    def build(
        self,
        root: Node | None,
        parent_hint: NodeRef | Node | str | None = None,
    ) -> Report:
        if root is None:
            raise ConfigurationError("Please assign a root node.")

        report = Report(operation="build", target=root.name)
        start = self.log.current_sequence
        self.log.register_hierarchy(root)
        proxy_parent = resolve(as_node_ref(parent_hint), root)
        report.proxy_parent = proxy_parent.path

        limbs = nodes_with(root, CapabilityKind.PHYSICAL_BODY)
        if not limbs:
            self._warn(
                report,
                "No 'PhysicalBody' components found. Set up the physics bodies before building the grab rig.",
            )
            return report

        for limb in limbs:
            self._build_node(limb, proxy_parent, report)
            report.processed += 1

        report.edit_count = self.log.current_sequence - start
        self._info(report, f"Successfully configured {report.processed} limbs on '{root.name}'.")
        return report

    def _build_node(self, node: Node, proxy_parent: Node, report: Report) -> None:
        body = node.get(CapabilityKind.PHYSICAL_BODY)
        grabbable = self._ensure(node, CapabilityKind.GRABBABLE, report)
        self._ensure(node, CapabilityKind.STANDARD_INTERACTABLE, report)
        transformer = self._ensure(node, CapabilityKind.PHYSICS_JOINT_TRANSFORMER, report)

        try:
            body_field = grabbable.require_field(GRABBABLE_BODY_FIELD)
            link_field = grabbable.require_field(GRABBABLE_TRANSFORMER_FIELD)
            root_field = transformer.require_field(TRANSFORMER_ROOT_FIELD)
            kinematic_field = transformer.require_field(TRANSFORMER_KINEMATIC_FIELD)
        except SchemaMismatchError as exc:
            self._schema_error(report, node, exc)
            return

        self.log.write_field(body_field, body)
        self.log.write_field(root_field, proxy_parent)
        # Physics joints, not a kinematic snap to the hand: the limb should dangle.
        self.log.write_field(kinematic_field, False)
        self.log.write_field(link_field, transformer)

    # ------------------------------------------------------------------
    # Shared steps
    # ------------------------------------------------------------------

    def _ensure(self, node: Node, kind: CapabilityKind, report: Report) -> Capability:
        """Return the single ``kind`` capability on ``node``, adding it if absent.

        Extra instances of the same kind are removed, first one wins.
        """
        existing = node.get_all(kind)
        if not existing:
            capability = self.log.add_capability(node, kind)
            self._info(report, f"Added '{kind.value}' to '{node.name}'.")
            return capability
        for duplicate in existing[1:]:
            self._info(report, f"Removing duplicate '{kind.value}' from '{node.name}'.")
            self.log.remove_capability(duplicate)
        return existing[0]

    def _schema_error(self, report: Report, node: Node, exc: SchemaMismatchError) -> None:
        mismatch = SchemaMismatch(
            node=node.path,
            capability=exc.capability_kind,
            field=exc.field_name,
            message=str(exc),
        )
        report.errors.append(mismatch)
        logger.error(
            "%s: Could not find field '%s' on '%s' for '%s'; skipping node.",
            LOG_PREFIX,
            exc.field_name,
            exc.capability_kind,
            node.path,
        )

    @staticmethod
    def _info(report: Report, message: str) -> None:
        report.lines.append(message)
        logger.info("%s: %s", LOG_PREFIX, message)

    @staticmethod
    def _warn(report: Report, message: str) -> None:
        report.warnings.append(message)
        logger.warning("%s: %s", LOG_PREFIX, message)


def fix_template(
    template: str | os.PathLike[str] | None,
    parent_hint: NodeRef | Node | str | None = None,
) -> Report:
    return Reconciler().fix(template, parent_hint)


def build_ragdoll(root: Node | None, parent_hint: NodeRef | Node | str | None = None) -> Report:
    return Reconciler().build(root, parent_hint)


def build_template(
    template: str | os.PathLike[str] | None,
    parent_hint: NodeRef | Node | str | None = None,
    save: bool = False,
) -> Report:
    """Run the build pass on a stored template, writing it back only if ``save``."""
    if template is None or (isinstance(template, str) and not template.strip()):
        raise ConfigurationError("Please assign a template first.")

    context = open_template(template)
    try:
        report = Reconciler().build(context.root, parent_hint)
        report.target = str(context.path)
        if save and report.processed:
            save_template(context)
            report.persisted = True
    finally:
        close_template(context)
    return report
