from __future__ import annotations

import logging
import itertools
from typing import Any, Dict, List, Mapping, Optional, Type

from docmapper.core.entities import Entity

from .repository import ValidationFailures

log = logging.getLogger(__name__)


class InMemoryRepository:
    """Identity-map repository.

    Entities are kept by type and id; ``find_scoped`` hands out the stored
    instance itself. Ids are assigned from a per-repository sequence on first
    save. ``saved`` records every save in call order.
    """

    def __init__(self):
        self._rows: Dict[Type[Entity], Dict[str, Entity]] = {}
        self._ids = itertools.count(1)
        self.saved: List[Entity] = []

    def add(self, entity: Entity) -> Entity:
        """Store an entity without validation (test and fixture seeding)."""
        if entity.id is None:
            entity.id = next(self._ids)
        self._rows.setdefault(type(entity), {})[str(entity.id)] = entity
        return entity

    def all(self, domain_type: Type[Entity]) -> List[Entity]:
        return list(self._rows.get(domain_type, {}).values())

    def count(self, domain_type: Type[Entity]) -> int:
        return len(self._rows.get(domain_type, {}))

    def find_scoped(self, domain_type: Type[Entity], scope: Mapping[str, Any], id: str) -> Optional[Entity]:
        entity = self._rows.get(domain_type, {}).get(str(id))
        if entity is None:
            return None
        for k, v in scope.items():
            if getattr(entity, k, None) != v:
                log.debug("repository.out_of_scope type=%s id=%s field=%s", domain_type.__name__, id, k)
                return None
        return entity

    def validate(self, entity: Entity) -> ValidationFailures:
        return {k: list(v) for k, v in (entity.validate() or {}).items() if v}

    def save(self, entity: Entity) -> None:
        failures = self.validate(entity)
        if failures:
            raise ValueError(f"{type(entity).__name__} is invalid: {failures}")
        self.add(entity)
        self.saved.append(entity)
