"""Exception types raised by the grab-rig reconciler."""
from __future__ import annotations


class GrabRigError(Exception):
    """Base class for all grab-rig errors."""


class ConfigurationError(GrabRigError):
    """A call-level input is missing or unusable (no template, no root node).

    Raised before any mutation happens.
    """


class TemplateNotFoundError(ConfigurationError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Template not found: {path}")
        self.path = path


class SchemaMismatchError(GrabRigError):
    """A capability instance does not expose a field the reconciler needs.

    Happens when a template was written against a different capability shape.
    The reconciler catches this per node and keeps going.
    """

    def __init__(self, capability_kind: str, field_name: str, node_path: str | None = None) -> None:
        self.capability_kind = capability_kind
        self.field_name = field_name
        self.node_path = node_path
        where = f" on '{node_path}'" if node_path else ""
        super().__init__(f"Field '{field_name}' not found on '{capability_kind}'{where}")
