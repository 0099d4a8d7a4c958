"""Grab-rig reconciliation for template hierarchies.

This package centralizes the capability model, the node hierarchy helpers, the
proxy-parent resolver, the edit log and the fix/build passes so the CLI and the
MCP tool share one implementation.
"""

from .capabilities import (
    HAND_GRAB_INTERACTABLES,
    Capability,
    CapabilityKind,
    FieldHandle,
)
from .cleanup import clean
from .edit_log import EditEntry, EditKind, EditLog
from .errors import ConfigurationError, GrabRigError, SchemaMismatchError, TemplateNotFoundError
from .graph import Node, nodes_with
from .models import Report, SchemaMismatch
from .reconciler import Reconciler, build_ragdoll, build_template, fix_template
from .references import ExternalHint, InContext, NodeRef, as_node_ref, resolve
from .template_store import EditContext, TemplateDocument, open_template, save_template

__all__ = [
    # Passes
    "Reconciler",
    "fix_template",
    "build_ragdoll",
    "build_template",
    "Report",
    "SchemaMismatch",
    # Building blocks
    "Capability",
    "CapabilityKind",
    "FieldHandle",
    "HAND_GRAB_INTERACTABLES",
    "Node",
    "nodes_with",
    "clean",
    "InContext",
    "ExternalHint",
    "NodeRef",
    "as_node_ref",
    "resolve",
    "EditLog",
    "EditEntry",
    "EditKind",
    "EditContext",
    "TemplateDocument",
    "open_template",
    "save_template",
    # Errors
    "GrabRigError",
    "ConfigurationError",
    "TemplateNotFoundError",
    "SchemaMismatchError",
]
