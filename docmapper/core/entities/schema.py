from __future__ import annotations

import dataclasses
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Type

from docmapper.core.errors import TypeMismatchError, UnknownFieldError

from .models import Entity


class FieldKind(str, Enum):
    ATTRIBUTE = "attribute"
    TO_ONE = "to_one"
    TO_MANY = "to_many"


@dataclass(frozen=True)
class FieldAccessor:
    owner: Type[Entity]
    name: str
    kind: FieldKind
    target: Optional[Type[Entity]] = None

    @property
    def is_association(self) -> bool:
        return self.kind is not FieldKind.ATTRIBUTE

    def assign(self, entity: Entity, value: Any) -> None:
        if self.kind is FieldKind.TO_ONE:
            if value is not None and not isinstance(value, self.target):
                raise TypeMismatchError(self.owner, self.name, self.target.__name__, value)
        elif self.kind is FieldKind.TO_MANY:
            if not isinstance(value, list) or not all(isinstance(v, self.target) for v in value):
                raise TypeMismatchError(self.owner, self.name, f"list of {self.target.__name__}", value)
            value = list(value)
        setattr(entity, self.name, value)

    def append(self, entity: Entity, value: Any) -> None:
        if self.kind is not FieldKind.TO_MANY:
            raise TypeMismatchError(self.owner, self.name, "a to-many association", value)
        if not isinstance(value, self.target):
            raise TypeMismatchError(self.owner, self.name, self.target.__name__, value)
        collection = getattr(entity, self.name)
        if collection is None:
            collection = []
            setattr(entity, self.name, collection)
        collection.append(value)


def _entity_class(annotation: Any) -> Optional[Type[Entity]]:
    if isinstance(annotation, type) and issubclass(annotation, Entity):
        return annotation
    return None


def _classify(annotation: Any) -> tuple[FieldKind, Optional[Type[Entity]]]:
    target = _entity_class(annotation)
    if target is not None:
        return FieldKind.TO_ONE, target

    origin = typing.get_origin(annotation)
    args = [a for a in typing.get_args(annotation) if a is not type(None)]

    if origin is list and len(args) == 1 and _entity_class(args[0]):
        return FieldKind.TO_MANY, args[0]

    # Optional[X] / X | None
    if origin in (typing.Union, types.UnionType):
        if len(args) == 1:
            return _classify(args[0])

    return FieldKind.ATTRIBUTE, None


class EntitySchema:
    """Settable members of one domain type, keyed by field name."""

    def __init__(self, domain_type: Type[Entity], accessors: Dict[str, FieldAccessor]):
        self.domain_type = domain_type
        self._accessors = accessors

    @property
    def names(self) -> list[str]:
        return sorted(self._accessors.keys())

    def has(self, name: str) -> bool:
        return name in self._accessors

    def accessor(self, name: str) -> FieldAccessor:
        acc = self._accessors.get(name)
        if acc is None:
            raise UnknownFieldError(self.domain_type, name)
        return acc

    def new(self) -> Entity:
        return self.domain_type()


_SCHEMAS: Dict[Type[Entity], EntitySchema] = {}


def describe_entity(domain_type: Type[Entity]) -> EntitySchema:
    cached = _SCHEMAS.get(domain_type)
    if cached is not None:
        return cached

    if not (isinstance(domain_type, type) and issubclass(domain_type, Entity)):
        raise TypeError(f"{domain_type!r} is not an Entity subclass")
    if not dataclasses.is_dataclass(domain_type):
        raise TypeError(f"{domain_type.__name__} must be a dataclass")

    hints = typing.get_type_hints(domain_type)
    accessors: Dict[str, FieldAccessor] = {}
    for f in dataclasses.fields(domain_type):
        if not f.init:
            continue
        kind, target = _classify(hints.get(f.name, Any))
        accessors[f.name] = FieldAccessor(owner=domain_type, name=f.name, kind=kind, target=target)

    schema = EntitySchema(domain_type, accessors)
    _SCHEMAS[domain_type] = schema
    return schema
