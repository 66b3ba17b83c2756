from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional

from docmapper.core.config import MapperSettings, load_settings
from docmapper.core.document import split_document
from docmapper.core.entities import TypeRegistry
from docmapper.core.errors import MapperError
from docmapper.core.graph import RelationshipLinker, ResourceBuilder, ResourceGraph
from docmapper.core.persistence import Repository
from docmapper.core.report import build_error_report
from docmapper.core.result import MappedResource, MappingResult
from docmapper.core.rules import RenameTable, RuleSet, compile_rules
from docmapper.observability.metrics import inc_document, inc_validation_failures

log = logging.getLogger(__name__)


class DocumentMapper:
    """Maps JSON:API documents onto domain entities.

    The mapper itself is stateless between calls: rules are compiled and a
    fresh graph is built on every ``map`` call, so temporary ids never leak
    from one document into another.
    """

    def __init__(
        self,
        repository: Repository,
        registry: TypeRegistry,
        settings: Optional[MapperSettings] = None,
    ):
        self.repository = repository
        self.registry = registry
        self.settings = settings or load_settings()

    def map(
        self,
        document: Mapping[str, Any],
        rules: Mapping[str, Any],
        renames: Optional[Mapping[str, Any]] = None,
    ) -> MappingResult:
        return self._map(document, rules, (), renames, mode="scoped")

    def map_unsafe(
        self,
        document: Mapping[str, Any],
        rules: Mapping[str, Any],
        unscoped_types: Iterable[str],
        renames: Optional[Mapping[str, Any]] = None,
    ) -> MappingResult:
        """Like ``map`` but the named types may be declared without a scope."""
        return self._map(document, rules, tuple(unscoped_types), renames, mode="unsafe")

    def map_ruleset(self, document: Mapping[str, Any], ruleset: RuleSet) -> MappingResult:
        """Map with rules loaded from a rules file."""
        if ruleset.unscoped:
            return self.map_unsafe(document, ruleset.rules, ruleset.unscoped, ruleset.renames)
        return self.map(document, ruleset.rules, ruleset.renames)

    def _map(
        self,
        document: Mapping[str, Any],
        rules: Mapping[str, Any],
        unscoped_types: Iterable[str],
        renames: Optional[Mapping[str, Any]],
        *,
        mode: str,
    ) -> MappingResult:
        try:
            result = self._run(document, rules, unscoped_types, renames)
        except MapperError as e:
            inc_document(mode, e.code, enabled=self.settings.metrics_enabled)
            log.info("mapper.failed mode=%s code=%s error=%s", mode, e.code, e)
            raise
        inc_document(mode, "ok", enabled=self.settings.metrics_enabled)
        return result

    def _run(
        self,
        document: Mapping[str, Any],
        raw_rules: Mapping[str, Any],
        unscoped_types: Iterable[str],
        raw_renames: Optional[Mapping[str, Any]],
    ) -> MappingResult:
        renames = RenameTable.parse(raw_renames)
        rules = compile_rules(
            raw_rules,
            registry=self.registry,
            renames=renames,
            unscoped_types=unscoped_types,
        )

        graph = ResourceGraph()
        builder = ResourceBuilder(rules, self.repository, graph, self.settings)
        parts = split_document(document)

        resources: List[MappedResource] = []
        primary: List[Any] = []
        included: List[Any] = []
        for fragments, out in ((parts.primary, primary), (parts.included, included)):
            for fragment in fragments:
                node = builder.build(fragment.raw, fragment.pointer)
                if node is None:
                    continue
                out.append(node.entity)
                resources.append(MappedResource(fragment.pointer, node.key.type, node.entity))

        RelationshipLinker(rules, self.repository, graph, self.settings).link_all()

        if parts.primary_is_list:
            data: Any = primary
        else:
            data = primary[0] if primary else None

        log.info(
            "mapper.mapped primary=%s included=%s nodes=%s",
            len(primary),
            len(included),
            len(graph),
        )
        return MappingResult(primary=data, included=included, resources=resources, renames=renames)

    def all_valid(self, result: MappingResult) -> bool:
        valid = True
        for entity in result.entities():
            failures = self.repository.validate(entity)
            if failures:
                valid = False
                origin = result.first_resource(entity)
                inc_validation_failures(
                    origin.type,
                    sum(len(m) for m in failures.values()),
                    enabled=self.settings.metrics_enabled,
                )
        return valid

    def save_all(self, result: MappingResult) -> bool:
        """Validate every mapped entity and persist them only if all are valid."""
        if not self.all_valid(result):
            log.warning("mapper.save_refused entities=%s", len(result.entities()))
            return False

        for entity in result.entities():
            self.repository.save(entity)
        log.info("mapper.saved entities=%s", len(result.entities()))
        return True

    def error_report(self, result: MappingResult) -> dict:
        return build_error_report(result, self.repository).to_dict()
