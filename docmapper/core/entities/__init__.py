from .models import Entity
from .registry import TypeRegistry
from .schema import EntitySchema, FieldAccessor, FieldKind, describe_entity

__all__ = [
    "Entity",
    "EntitySchema",
    "FieldAccessor",
    "FieldKind",
    "TypeRegistry",
    "describe_entity",
]
