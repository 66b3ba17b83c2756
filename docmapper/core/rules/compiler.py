from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Type

from docmapper.core.entities import Entity, TypeRegistry, describe_entity
from docmapper.core.errors import RulesError, UnknownFieldError, UnknownTypeError
from docmapper.core.inflect import default_type_name

from .models import CompiledRules, TypeDescriptor
from .renames import RenameTable

log = logging.getLogger(__name__)


def _split_rule(wire_type: str, rule: Any, unscoped: bool) -> Tuple[Sequence[Any], Mapping[str, Any]]:
    if not isinstance(rule, (list, tuple)):
        raise RulesError(f"Rule for {wire_type} must be a list of names ending with a scope mapping")

    if rule and isinstance(rule[-1], Mapping):
        return rule[:-1], rule[-1]
    if unscoped:
        return rule, {}
    raise RulesError(f"Missing scope for {wire_type}")


def _resolve_domain_type(wire_type: str, registry: TypeRegistry, renames: RenameTable) -> Type[Entity]:
    ref = renames.domain_type(wire_type)
    if isinstance(ref, type):
        return ref

    name = ref if isinstance(ref, str) else default_type_name(wire_type)
    domain_type = registry.get(name)
    if domain_type is None:
        raise UnknownTypeError(wire_type, f"No domain type {name!r} registered for {wire_type!r}")
    return domain_type


def compile_type(
    wire_type: str,
    rule: Any,
    *,
    registry: TypeRegistry,
    renames: RenameTable,
    unscoped: bool = False,
) -> TypeDescriptor:
    names, scope = _split_rule(wire_type, rule, unscoped)

    if not all(isinstance(n, str) for n in names):
        raise RulesError("Attributes must be strings")
    if not all(isinstance(k, str) for k in scope.keys()):
        raise RulesError(f"Scope keys for {wire_type} must be strings")

    domain_type = _resolve_domain_type(wire_type, registry, renames)
    schema = describe_entity(domain_type)

    fields: Dict[str, str] = {n: renames.domain_field(wire_type, n) for n in names}

    clashing = sorted(set(fields.values()) & set(scope.keys()))
    if clashing:
        raise RulesError(f"Scope fields of {wire_type} cannot be whitelisted: {', '.join(clashing)}")

    for domain_field in list(fields.values()) + list(scope.keys()):
        if not schema.has(domain_field):
            raise UnknownFieldError(domain_type, domain_field)

    return TypeDescriptor(
        name=wire_type,
        domain_type=domain_type,
        schema=schema,
        attributes=frozenset(fields.values()),
        fields=MappingProxyType(fields),
        scope=MappingProxyType(dict(scope)),
    )


def compile_rules(
    raw_rules: Mapping[str, Any],
    *,
    registry: TypeRegistry,
    renames: Optional[RenameTable] = None,
    unscoped_types: Iterable[str] = (),
) -> CompiledRules:
    """Compile a caller ruleset into one TypeDescriptor per wire type.

    ``raw_rules`` maps a wire type name to ``[*field_names, scope]`` where
    ``scope`` is a mapping of domain field -> value. Types named in
    ``unscoped_types`` may omit the trailing scope mapping.
    """
    if not isinstance(raw_rules, Mapping):
        raise RulesError("Rules must be a mapping of type name to rule list")

    renames = renames or RenameTable()
    unscoped = {str(t) for t in unscoped_types}

    descriptors: Dict[str, TypeDescriptor] = {}
    for wire_type, rule in raw_rules.items():
        if not isinstance(wire_type, str):
            raise RulesError(f"Type names must be strings, got {wire_type!r}")
        descriptors[wire_type] = compile_type(
            wire_type,
            rule,
            registry=registry,
            renames=renames,
            unscoped=wire_type in unscoped,
        )
        log.debug(
            "rules.compiled type=%s domain=%s fields=%s scope=%s",
            wire_type,
            descriptors[wire_type].domain_type.__name__,
            sorted(descriptors[wire_type].attributes),
            dict(descriptors[wire_type].scope),
        )

    return CompiledRules(descriptors=MappingProxyType(descriptors))
