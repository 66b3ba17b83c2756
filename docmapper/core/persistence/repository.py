from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, Type, runtime_checkable

from docmapper.core.entities import Entity


@runtime_checkable
class Repository(Protocol):
    """Persistence collaborator used by the mapper.

    ``find_scoped`` returns None both for unknown ids and for entities that
    exist but do not match ``scope``; callers cannot tell the two apart.
    ``validate`` reports failures per domain field and never raises for
    invalid data. ``save`` persists one entity that already passed validation.
    """

    def find_scoped(self, domain_type: Type[Entity], scope: Mapping[str, Any], id: str) -> Optional[Entity]:
        ...

    def validate(self, entity: Entity) -> Mapping[str, List[str]]:
        ...

    def save(self, entity: Entity) -> None:
        ...


ValidationFailures = Dict[str, List[str]]
