"""Node hierarchy and the read/mutate helpers the reconciler walks it with."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator

from .capabilities import Capability, CapabilityKind


@dataclass(eq=False)
class Node:
    """One entity in a template hierarchy.

    Owns its children and capabilities; ``parent`` is a non-owning back-reference.
    """
    name: str
    children: list["Node"] = field(default_factory=list)
    capabilities: list[Capability] = field(default_factory=list)
    parent: "Node | None" = None

    def add_child(self, child: "Node", index: int | None = None) -> "Node":
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        if index is None:
            self.children.append(child)
        else:
            self.children.insert(index, child)
        return child

    def attach(self, capability: Capability, index: int | None = None) -> Capability:
        """Attach ``capability`` to this node without recording an edit."""
        capability.node = self
        if index is None or index > len(self.capabilities):
            self.capabilities.append(capability)
        else:
            self.capabilities.insert(index, capability)
        return capability

    def detach(self, capability: Capability) -> int:
        """Detach ``capability`` and return the slot it occupied."""
        index = next(i for i, c in enumerate(self.capabilities) if c is capability)
        del self.capabilities[index]
        capability.node = None
        return index

    def get(self, kind: CapabilityKind) -> Capability | None:
        for capability in self.capabilities:
            if capability.kind == kind:
                return capability
        return None

    def get_all(self, kind: CapabilityKind) -> list[Capability]:
        return [c for c in self.capabilities if c.kind == kind]

    def has(self, kind: CapabilityKind) -> bool:
        return self.get(kind) is not None

    def walk(self) -> Iterator["Node"]:
        """Pre-order walk of this node and every descendant."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def is_child_of(self, ancestor: "Node") -> bool:
        """True if ``ancestor`` is this node or one of its parents."""
        current: Node | None = self
        while current is not None:
            if current is ancestor:
                return True
            current = current.parent
        return False

    def find(self, name: str) -> "Node | None":
        """First node in pre-order (self included) named ``name``."""
        for node in self.walk():
            if node.name == name:
                return node
        return None

    @property
    def path(self) -> str:
        parts = []
        current: Node | None = self
        while current is not None:
            parts.append(current.name)
            current = current.parent
        return "/".join(reversed(parts))

    def __repr__(self) -> str:
        return f"Node({self.name!r})"


def descendants_matching(
    root: Node,
    predicate: Callable[[Node], bool],
    include_root: bool = True,
) -> list[Node]:
    return [
        node for node in root.walk()
        if (include_root or node is not root) and predicate(node)
    ]


def nodes_with(root: Node, kind: CapabilityKind, include_root: bool = True) -> list[Node]:
    """Every node under ``root`` carrying at least one ``kind`` capability."""
    return descendants_matching(root, lambda node: node.has(kind), include_root)


def capabilities_in_children(
    root: Node,
    kinds: Iterable[CapabilityKind],
    include_root: bool = True,
) -> list[Capability]:
    wanted = frozenset(kinds)
    found: list[Capability] = []
    for node in root.walk():
        if not include_root and node is root:
            continue
        found.extend(c for c in node.capabilities if c.kind in wanted)
    return found


def describe_hierarchy(root: Node) -> list[str]:
    """Indented one-line-per-node listing, e.g. ``  Arm [Grabbable, PhysicalBody]``."""
    lines: list[str] = []
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        kinds = ", ".join(c.kind.value for c in node.capabilities)
        suffix = f" [{kinds}]" if kinds else ""
        lines.append(f"{'  ' * depth}{node.name}{suffix}")
        stack.extend((child, depth + 1) for child in reversed(node.children))
    return lines
