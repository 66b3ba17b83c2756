from __future__ import annotations

import logging
from typing import Any, Optional

from docmapper.core.config import MapperSettings
from docmapper.core.document import ResourceObject, parse_relationship, parse_resource
from docmapper.core.entities import Entity
from docmapper.core.errors import NotFoundError
from docmapper.core.persistence import Repository
from docmapper.core.rules import CompiledRules, TypeDescriptor
from docmapper.observability.metrics import inc_skipped

from .models import ResourceGraph, ResourceIdentifier, ResourceNode

log = logging.getLogger(__name__)


def find_scoped_or_raise(repository: Repository, descriptor: TypeDescriptor, raw_id: str) -> Entity:
    entity = repository.find_scoped(descriptor.domain_type, descriptor.scope, raw_id)
    if entity is None:
        raise NotFoundError(descriptor.name, raw_id)
    return entity


class ResourceBuilder:
    """First pass: one node per recognized resource fragment."""

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

    def build(self, raw: Any, pointer: str) -> Optional[ResourceNode]:
        resource = parse_resource(raw)
        if resource is None:
            log.debug("builder.skip pointer=%s reason=malformed", pointer)
            inc_skipped("malformed", enabled=self.settings.metrics_enabled)
            return None

        descriptor = self.rules.get(resource.type)
        if descriptor is None:
            log.debug("builder.skip pointer=%s reason=unknown_type type=%s", pointer, resource.type)
            inc_skipped("unknown_type", enabled=self.settings.metrics_enabled)
            return None

        key = ResourceIdentifier(resource.type, resource.id)
        node = self.graph.get(key)
        if node is None:
            node = self.graph.add(
                ResourceNode(
                    key=key,
                    entity=self._entity_for(descriptor, key),
                    descriptor=descriptor,
                    pointer=pointer,
                )
            )
        else:
            log.debug("builder.merge pointer=%s key=%s first=%s", pointer, key, node.pointer)

        self._apply_attributes(node, resource)
        self._capture_relationships(node, resource)
        return node

    def _entity_for(self, descriptor: TypeDescriptor, key: ResourceIdentifier) -> Entity:
        if key.raw_id is None or key.is_temporary(self.settings.temp_id_prefix):
            entity = descriptor.schema.new()
            for name, value in descriptor.scope.items():
                descriptor.schema.accessor(name).assign(entity, value)
            return entity

        log.debug("builder.lookup type=%s id=%s", descriptor.name, key.raw_id)
        return find_scoped_or_raise(self.repository, descriptor, key.raw_id)

    def _apply_attributes(self, node: ResourceNode, resource: ResourceObject) -> None:
        descriptor = node.descriptor
        for wire_name, value in resource.attributes.items():
            field_name = descriptor.permits(wire_name)
            if field_name is None:
                continue
            descriptor.schema.accessor(field_name).assign(node.entity, value)

    def _capture_relationships(self, node: ResourceNode, resource: ResourceObject) -> None:
        descriptor = node.descriptor
        for wire_name, raw in resource.relationships.items():
            field_name = descriptor.permits(wire_name)
            if field_name is None:
                continue
            linkage = parse_relationship(raw)
            if not linkage:
                continue
            if isinstance(linkage, list):
                node.pending_relationships[field_name] = [
                    ResourceIdentifier(link.type, link.id) for link in linkage
                ]
            else:
                node.pending_relationships[field_name] = ResourceIdentifier(linkage.type, linkage.id)
