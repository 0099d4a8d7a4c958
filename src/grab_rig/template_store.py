"""Load templates into an editable context and write them back.

A template is a JSON document holding one node hierarchy. References between
capabilities and nodes are stored as ``{"$node": id}`` / ``{"$capability": id}``
markers; ids are only meaningful inside one document and are reassigned in
pre-order every time the hierarchy is written. Fields a capability kind does not
declare are kept as-is so documents from other capability versions round-trip.
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .capabilities import Capability, CapabilityKind
from .config import cfg
from .errors import ConfigurationError, GrabRigError, TemplateNotFoundError
from .graph import Node

logger = logging.getLogger("grab-rig")

FORMAT_VERSION = 1
NODE_REF_KEY = "$node"
CAPABILITY_REF_KEY = "$capability"


class CapabilityRecord(BaseModel):
    """Serialized capability."""
    id: int
    kind: CapabilityKind
    fields: dict[str, Any] = Field(default_factory=dict)


class NodeRecord(BaseModel):
    """Serialized node and its owned subtree."""
    id: int
    name: str
    capabilities: list[CapabilityRecord] = Field(default_factory=list)
    children: list["NodeRecord"] = Field(default_factory=list)


NodeRecord.model_rebuild()


class TemplateDocument(BaseModel):
    """Top-level on-disk template."""
    format_version: int = FORMAT_VERSION
    root: NodeRecord


@dataclass
class EditContext:
    """A template opened for editing. Discarded once closed."""
    path: Path
    root: Node
    closed: bool = False


# ---------------------------------------------------------------------------
# Graph <-> document
# ---------------------------------------------------------------------------

def _is_ref(value: Any, key: str) -> bool:
    return isinstance(value, dict) and set(value) == {key}


def load_graph(document: TemplateDocument) -> Node:
    """Build a live hierarchy from ``document``, resolving reference markers."""
    nodes: dict[int, Node] = {}
    capabilities: dict[int, Capability] = {}
    pending: list[tuple[Capability, dict[str, Any]]] = []

    def build(record: NodeRecord, parent: Node | None) -> Node:
        node = Node(record.name)
        if parent is not None:
            parent.add_child(node)
        nodes[record.id] = node
        for cap_record in record.capabilities:
            capability = node.attach(Capability(kind=cap_record.kind))
            capabilities[cap_record.id] = capability
            pending.append((capability, cap_record.fields))
        for child in record.children:
            build(child, node)
        return node

    root = build(document.root, None)

    for capability, raw_fields in pending:
        for name, value in raw_fields.items():
            if _is_ref(value, NODE_REF_KEY):
                value = nodes.get(value[NODE_REF_KEY])
            elif _is_ref(value, CAPABILITY_REF_KEY):
                value = capabilities.get(value[CAPABILITY_REF_KEY])
            else:
                capability.fields[name] = value
                continue
            if value is None:
                logger.warning(
                    "Dangling reference in %s.%s on '%s'; cleared",
                    capability.kind.value,
                    name,
                    capability.node.path,
                )
            capability.fields[name] = value
    return root


def dump_graph(root: Node) -> TemplateDocument:
    """Serialize the hierarchy under ``root``.

    References to nodes or capabilities outside the hierarchy cannot be stored
    and are written as null.
    """
    node_ids: dict[int, int] = {}
    capability_ids: dict[int, int] = {}
    for node in root.walk():
        node_ids[id(node)] = len(node_ids) + 1
        for capability in node.capabilities:
            capability_ids[id(capability)] = len(capability_ids) + 1

    def encode(capability: Capability, name: str, value: Any) -> Any:
        if isinstance(value, Node):
            ref = node_ids.get(id(value))
            key = NODE_REF_KEY
        elif isinstance(value, Capability):
            ref = capability_ids.get(id(value))
            key = CAPABILITY_REF_KEY
        else:
            return value
        if ref is None:
            logger.warning(
                "%s.%s on '%s' points outside the template; writing null",
                capability.kind.value,
                name,
                capability.node.path if capability.node is not None else "?",
            )
            return None
        return {key: ref}

    def record(node: Node) -> NodeRecord:
        return NodeRecord(
            id=node_ids[id(node)],
            name=node.name,
            capabilities=[
                CapabilityRecord(
                    id=capability_ids[id(c)],
                    kind=c.kind,
                    fields={name: encode(c, name, value) for name, value in c.fields.items()},
                )
                for c in node.capabilities
            ],
            children=[record(child) for child in node.children],
        )

    return TemplateDocument(root=record(root))


def render_document(document: TemplateDocument) -> str:
    return json.dumps(document.model_dump(mode="json"), indent=cfg.json_indent) + "\n"


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

def read_document(path: str | os.PathLike[str]) -> TemplateDocument:
    template_path = Path(path)
    if not template_path.is_file():
        raise TemplateNotFoundError(str(path))
    try:
        raw = json.loads(template_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigurationError(f"Failed to read template '{path}': {exc}") from exc
    try:
        return TemplateDocument.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Template '{path}' is not a valid template: {exc}") from exc


def open_template(path: str | os.PathLike[str]) -> EditContext:
    """Load the template at ``path`` into an editable in-memory context."""
    template_path = Path(path)
    root = load_graph(read_document(template_path))
    logger.debug("Opened template %s (root '%s')", template_path, root.name)
    return EditContext(path=template_path, root=root)


def save_template(context: EditContext) -> None:
    """Write the whole context back over its source file in one replace."""
    if context.closed:
        raise GrabRigError(f"Template context for '{context.path}' is already closed")

    payload = render_document(dump_graph(context.root))
    target = context.path
    if cfg.backup_on_save and target.exists():
        shutil.copy2(target, target.with_name(target.name + ".bak"))

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        if target.exists():
            shutil.copymode(target, tmp_name)
        os.replace(tmp_name, target)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    logger.debug("Saved template %s", target)


def close_template(context: EditContext) -> None:
    context.closed = True


def write_template(path: str | os.PathLike[str], root: Node) -> Path:
    """Persist a freshly built hierarchy to ``path`` (creates or overwrites)."""
    context = EditContext(path=Path(path), root=root)
    try:
        save_template(context)
    finally:
        close_template(context)
    return context.path
