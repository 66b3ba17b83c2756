from __future__ import annotations

from typing import Dict, Iterable, Optional, Type

from .models import Entity
from .schema import describe_entity


class TypeRegistry:
    """Explicit name -> domain type table.

    Names are the class names of the registered entity types unless given
    explicitly. Wire type names are resolved against this table only, never by
    scanning loaded modules.
    """

    def __init__(self, types: Iterable[Type[Entity]] = ()):
        self._types: Dict[str, Type[Entity]] = {}
        for t in types:
            self.register(t)

    def register(self, domain_type: Type[Entity], name: Optional[str] = None) -> Type[Entity]:
        describe_entity(domain_type)
        key = name or domain_type.__name__
        existing = self._types.get(key)
        if existing is not None and existing is not domain_type:
            raise ValueError(f"Duplicate domain type name: {key}")
        self._types[key] = domain_type
        return domain_type

    def get(self, name: str) -> Optional[Type[Entity]]:
        return self._types.get(name)

    def list_names(self) -> list[str]:
        return sorted(self._types.keys())
