from __future__ import annotations

import logging
from typing import Optional

from docmapper.core.config import MapperSettings
from docmapper.core.entities import Entity
from docmapper.core.errors import NotFoundError, TypeMismatchError
from docmapper.core.persistence import Repository
from docmapper.core.rules import CompiledRules

from .builder import find_scoped_or_raise
from .models import ResourceGraph, ResourceIdentifier, ResourceNode

log = logging.getLogger(__name__)


class RelationshipLinker:
    """Second pass: wires pending references once every node is registered."""

    def __init__(
        self,
        rules: CompiledRules,
        repository: Repository,
        graph: ResourceGraph,
        settings: MapperSettings,
    ):
        self.rules = rules
        self.repository = repository
        self.graph = graph
        self.settings = settings

    def link_all(self) -> None:
        for node in self.graph:
            self.link(node)

    def link(self, node: ResourceNode) -> None:
        schema = node.descriptor.schema
        for field_name, ref in node.pending_relationships.items():
            accessor = schema.accessor(field_name)
            if not accessor.is_association:
                raise TypeMismatchError(schema.domain_type, field_name, "a plain value", ref)

            if isinstance(ref, list):
                for item in ref:
                    other = self.resolve(item)
                    if other is not None:
                        accessor.append(node.entity, other)
            else:
                other = self.resolve(ref)
                if other is not None:
                    accessor.assign(node.entity, other)

    def resolve(self, ref: ResourceIdentifier) -> Optional[Entity]:
        """Entity a reference points to.

        None when the referenced type is not part of the ruleset; such
        references are ignored rather than looked up.
        """
        descriptor = self.rules.get(ref.type)
        if descriptor is None:
            log.debug("linker.ignored type=%s id=%s reason=unknown_type", ref.type, ref.raw_id)
            return None

        node = self.graph.get(ref)
        if node is not None:
            return node.entity

        if ref.raw_id is None or ref.is_temporary(self.settings.temp_id_prefix):
            raise NotFoundError(ref.type, ref.raw_id)

        log.debug("linker.lookup type=%s id=%s", ref.type, ref.raw_id)
        return find_scoped_or_raise(self.repository, descriptor, ref.raw_id)
