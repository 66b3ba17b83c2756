from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional, Type

from docmapper.core.entities import Entity, EntitySchema


@dataclass(frozen=True)
class TypeDescriptor:
    name: str
    domain_type: Type[Entity]
    schema: EntitySchema
    # domain field names the client may write
    attributes: FrozenSet[str]
    # wire field name -> domain field name, restricted to the whitelist
    fields: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    # domain field -> value, force-applied on creation and used to filter lookups
    scope: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def permits(self, wire_field: str) -> Optional[str]:
        """Domain field for a whitelisted wire field, None when not permitted."""
        return self.fields.get(wire_field)


@dataclass(frozen=True)
class CompiledRules:
    descriptors: Mapping[str, TypeDescriptor]

    def get(self, wire_type: Any) -> Optional[TypeDescriptor]:
        if not isinstance(wire_type, str):
            return None
        return self.descriptors.get(wire_type)

    def __contains__(self, wire_type: object) -> bool:
        return isinstance(wire_type, str) and wire_type in self.descriptors

    def __len__(self) -> int:
        return len(self.descriptors)
