"""Append-only record of structural edits, undoable as one group.

Every capability add, capability removal and field write made during a
reconciliation run goes through an ``EditLog``. Each entry gets a monotonically
increasing sequence number; ``undo_all`` replays the entries in reverse and
``undo_to`` stops at a given sequence.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .capabilities import Capability, CapabilityKind, FieldHandle
from .graph import Node
from .template_store import TemplateDocument, dump_graph

logger = logging.getLogger("grab-rig")


class EditKind(str, Enum):
    ADD_CAPABILITY = "add_capability"
    REMOVE_CAPABILITY = "remove_capability"
    SET_FIELD = "set_field"


@dataclass
class EditEntry:
    sequence: int
    kind: EditKind
    node: Node
    capability: Capability
    index: int | None = None
    field_name: str | None = None
    old_value: Any = None
    new_value: Any = None

    def describe(self) -> str:
        if self.kind == EditKind.SET_FIELD:
            return f"#{self.sequence} set {self.capability.kind.value}.{self.field_name} on '{self.node.path}'"
        verb = "add" if self.kind == EditKind.ADD_CAPABILITY else "remove"
        return f"#{self.sequence} {verb} {self.capability.kind.value} on '{self.node.path}'"


class EditLog:
    """Edit transaction log scoped to one reconciliation call."""

    def __init__(self, group_name: str = "Grab Rig") -> None:
        self.group_name = group_name
        self.baseline: TemplateDocument | None = None
        self._entries: list[EditEntry] = []
        self._sequence = 0

    @property
    def entries(self) -> tuple[EditEntry, ...]:
        return tuple(self._entries)

    @property
    def current_sequence(self) -> int:
        return self._sequence

    def __len__(self) -> int:
        return len(self._entries)

    def register_hierarchy(self, root: Node) -> None:
        """Snapshot the whole hierarchy as the group's undo baseline."""
        self.baseline = dump_graph(root)

    def add_capability(self, node: Node, kind: CapabilityKind) -> Capability:
        capability = node.attach(Capability.create(kind))
        self._append(EditKind.ADD_CAPABILITY, node, capability, index=len(node.capabilities) - 1)
        return capability

    def remove_capability(self, capability: Capability) -> None:
        node = capability.node
        if node is None:
            raise ValueError(f"{capability!r} is not attached to a node")
        index = node.detach(capability)
        self._append(EditKind.REMOVE_CAPABILITY, node, capability, index=index)

    def write_field(self, handle: FieldHandle, value: Any) -> bool:
        """Assign ``value`` through ``handle``. Returns False when it was already set."""
        old_value = handle.value
        if old_value is value or (type(old_value) is type(value) and old_value == value):
            return False
        handle.assign(value)
        self._append(
            EditKind.SET_FIELD,
            handle.capability.node,
            handle.capability,
            field_name=handle.name,
            old_value=old_value,
            new_value=value,
        )
        return True

    def undo_to(self, sequence: int) -> int:
        """Revert every edit recorded after ``sequence``. Returns the number reverted."""
        if sequence < 0 or sequence > self._sequence:
            raise ValueError(
                f"sequence must be between 0 and {self._sequence}, got {sequence}"
            )
        undone = 0
        while self._entries and self._entries[-1].sequence > sequence:
            self._revert(self._entries.pop())
            undone += 1
        self._sequence = sequence
        if undone:
            logger.info("%s: undid %d edit(s) back to sequence %d", self.group_name, undone, sequence)
        return undone

    def undo_all(self) -> int:
        return self.undo_to(0)

    def summary(self) -> dict[str, int]:
        counts = Counter(entry.kind.value for entry in self._entries)
        return {kind.value: counts.get(kind.value, 0) for kind in EditKind}

    def _append(self, kind: EditKind, node: Node | None, capability: Capability, **details: Any) -> None:
        self._sequence += 1
        entry = EditEntry(self._sequence, kind, node, capability, **details)
        self._entries.append(entry)
        logger.debug("%s: %s", self.group_name, entry.describe())

    @staticmethod
    def _revert(entry: EditEntry) -> None:
        if entry.kind == EditKind.ADD_CAPABILITY:
            entry.node.detach(entry.capability)
        elif entry.kind == EditKind.REMOVE_CAPABILITY:
            entry.node.attach(entry.capability, entry.index)
        else:
            entry.capability.fields[entry.field_name] = entry.old_value
