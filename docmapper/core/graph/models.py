from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from docmapper.core.entities import Entity
from docmapper.core.rules import TypeDescriptor


@dataclass(frozen=True)
class ResourceIdentifier:
    type: str
    raw_id: Optional[str] = None

    def is_temporary(self, prefix: str = "@") -> bool:
        return self.raw_id is not None and self.raw_id.startswith(prefix)


PendingRef = Union[ResourceIdentifier, List[ResourceIdentifier]]


@dataclass
class ResourceNode:
    key: ResourceIdentifier
    entity: Entity
    descriptor: TypeDescriptor
    # JSON pointer of the fragment that created the node, e.g. "/included/2"
    pointer: str
    pending_relationships: Dict[str, PendingRef] = field(default_factory=dict)


class ResourceGraph:
    """Nodes built from one document, keyed by (wire type, raw id).

    Fragments without an id are registered under a private key so that each
    one keeps its own node; they cannot be referenced from elsewhere.
    """

    def __init__(self):
        self._nodes: Dict[object, ResourceNode] = {}
        self._anonymous = 0

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self):
        return iter(list(self._nodes.values()))

    def get(self, key: ResourceIdentifier) -> Optional[ResourceNode]:
        if key.raw_id is None:
            return None
        return self._nodes.get(key)

    def add(self, node: ResourceNode) -> ResourceNode:
        if node.key.raw_id is None:
            self._anonymous += 1
            self._nodes[(node.key.type, self._anonymous)] = node
            return node
        if node.key in self._nodes:
            raise KeyError(f"node already registered: {node.key}")
        self._nodes[node.key] = node
        return node
