from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from docmapper.core.entities import Entity
from docmapper.core.rules import RenameTable


@dataclass(frozen=True)
class MappedResource:
    # JSON pointer of the fragment, "/data", "/data/3" or "/included/0"
    pointer: str
    # wire type name the fragment was declared with
    type: str
    entity: Entity


@dataclass
class MappingResult:
    primary: Union[Entity, List[Entity], None]
    included: List[Entity] = field(default_factory=list)
    resources: List[MappedResource] = field(default_factory=list)
    renames: RenameTable = field(default_factory=RenameTable)

    @property
    def is_collection(self) -> bool:
        return isinstance(self.primary, list)

    @property
    def is_single(self) -> bool:
        return not self.is_collection

    def entities(self) -> List[Entity]:
        """Primary then included entities, each instance once."""
        seen: set[int] = set()
        out: List[Entity] = []
        for r in self.resources:
            if id(r.entity) in seen:
                continue
            seen.add(id(r.entity))
            out.append(r.entity)
        return out

    def first_resource(self, entity: Entity) -> Optional[MappedResource]:
        for r in self.resources:
            if r.entity is entity:
                return r
        return None
