from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from docmapper.core.entities import Entity
from docmapper.core.errors import RulesError


TypeRef = Union[str, type]


class RenameSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    # wire type name -> domain class or registered domain type name
    types: Dict[str, Any] = {}
    # wire type name -> {wire attribute name -> domain field name}
    attributes: Dict[str, Dict[str, str]] = {}

    @field_validator("types")
    @classmethod
    def type_refs(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        for wire, ref in v.items():
            if isinstance(ref, str):
                continue
            if isinstance(ref, type) and issubclass(ref, Entity):
                continue
            raise ValueError(f"types.{wire} must be an Entity subclass or a type name")
        return v


class RenameTable:
    """Wire vocabulary <-> domain vocabulary. Missing entries map to themselves."""

    def __init__(self, spec: Optional[RenameSpec] = None):
        spec = spec or RenameSpec()
        self._types: Dict[str, TypeRef] = dict(spec.types)
        self._to_domain: Dict[str, Dict[str, str]] = {t: dict(m) for t, m in spec.attributes.items()}
        self._to_wire: Dict[str, Dict[str, str]] = {}
        for wire_type, mapping in self._to_domain.items():
            reverse: Dict[str, str] = {}
            for wire_attr, domain_attr in mapping.items():
                reverse.setdefault(domain_attr, wire_attr)
            self._to_wire[wire_type] = reverse

    @classmethod
    def parse(cls, raw: Optional[Mapping[str, Any]]) -> "RenameTable":
        if raw is None:
            return cls()
        if isinstance(raw, RenameTable):
            return raw
        if not isinstance(raw, Mapping):
            raise RulesError("Renames must be a mapping with 'types' and/or 'attributes'")
        try:
            spec = RenameSpec.model_validate(dict(raw))
        except ValidationError as e:
            raise RulesError(f"Invalid renames: {e.errors(include_url=False)}") from e
        return cls(spec)

    def domain_type(self, wire_type: str) -> Optional[TypeRef]:
        return self._types.get(wire_type)

    def domain_field(self, wire_type: str, wire_attr: str) -> str:
        return self._to_domain.get(wire_type, {}).get(wire_attr, wire_attr)

    def wire_field(self, wire_type: str, domain_attr: str) -> str:
        return self._to_wire.get(wire_type, {}).get(domain_attr, domain_attr)
