"""
docmapper: JSON:API documents -> graphs of domain entities.

- whitelisted, scoped writes per wire type
- relationships across data/included, including temporary "@" ids
- JSON:API error documents for validation failures
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from docmapper.core.config import MapperSettings
from docmapper.core.entities import Entity, TypeRegistry
from docmapper.core.errors import (
    CompileError,
    MapperError,
    NotFoundError,
    RulesError,
    TypeMismatchError,
    UnknownFieldError,
    UnknownTypeError,
)
from docmapper.core.mapper import DocumentMapper
from docmapper.core.persistence import InMemoryRepository, Repository
from docmapper.core.result import MappingResult

__version__ = "0.1.0"


def doc(
    document: Mapping[str, Any],
    rules: Mapping[str, Any],
    renames: Optional[Mapping[str, Any]] = None,
    *,
    repository: Repository,
    registry: TypeRegistry,
) -> MappingResult:
    return DocumentMapper(repository, registry).map(document, rules, renames)


def doc_unsafe(
    document: Mapping[str, Any],
    unscoped_types: Iterable[str],
    rules: Mapping[str, Any],
    renames: Optional[Mapping[str, Any]] = None,
    *,
    repository: Repository,
    registry: TypeRegistry,
) -> MappingResult:
    return DocumentMapper(repository, registry).map_unsafe(document, rules, unscoped_types, renames)


__all__ = [
    "CompileError",
    "DocumentMapper",
    "Entity",
    "InMemoryRepository",
    "MapperError",
    "MapperSettings",
    "MappingResult",
    "NotFoundError",
    "Repository",
    "RulesError",
    "TypeMismatchError",
    "TypeRegistry",
    "UnknownFieldError",
    "UnknownTypeError",
    "doc",
    "doc_unsafe",
]
