from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

log = logging.getLogger(__name__)


def _normalize_id(v: Any) -> Any:
    # ints are common in hand-built documents; bool is an int subclass and is rejected
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v


class ResourceLink(BaseModel):
    """Resource identifier object: ``{"type": ..., "id": ...}``."""

    model_config = ConfigDict(frozen=True)

    type: str
    id: str

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, v: Any) -> Any:
        return _normalize_id(v)


class ResourceObject(BaseModel):
    type: str
    id: Optional[str] = None
    attributes: Dict[str, Any] = {}
    relationships: Dict[str, Any] = {}

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, v: Any) -> Any:
        return _normalize_id(v)


RelationshipData = Union[ResourceLink, List[ResourceLink], None]


def parse_link(raw: Any) -> Optional[ResourceLink]:
    if not isinstance(raw, Mapping):
        return None
    try:
        return ResourceLink.model_validate(dict(raw))
    except ValidationError:
        return None


def parse_relationship(raw: Any) -> RelationshipData:
    """Linkage of one relationship entry; None when absent, null or malformed."""
    if not isinstance(raw, Mapping):
        return None
    data = raw.get("data")
    if isinstance(data, list):
        links = [parse_link(item) for item in data]
        return [l for l in links if l is not None]
    return parse_link(data)


def parse_resource(raw: Any) -> Optional[ResourceObject]:
    """Resource object, or None for a fragment that should be skipped."""
    if not isinstance(raw, Mapping):
        return None
    if "attributes" in raw and not isinstance(raw["attributes"], Mapping):
        return None
    if "relationships" in raw and not isinstance(raw["relationships"], Mapping):
        return None

    payload = {k: raw[k] for k in ("type", "id", "attributes", "relationships") if k in raw}
    for k in ("attributes", "relationships"):
        if k in payload:
            payload[k] = dict(payload[k])
    try:
        return ResourceObject.model_validate(payload)
    except ValidationError as e:
        log.debug("document.fragment_invalid errors=%s", e.errors(include_url=False))
        return None


@dataclass
class Fragment:
    pointer: str
    raw: Any


@dataclass
class DocumentParts:
    primary_is_list: bool = False
    primary: List[Fragment] = field(default_factory=list)
    included: List[Fragment] = field(default_factory=list)


def split_document(document: Any) -> DocumentParts:
    """Primary and included fragments with their JSON pointers."""
    parts = DocumentParts()
    if not isinstance(document, Mapping):
        return parts

    data = document.get("data")
    if isinstance(data, list):
        parts.primary_is_list = True
        parts.primary = [Fragment(f"/data/{i}", item) for i, item in enumerate(data)]
    elif data is not None:
        parts.primary = [Fragment("/data", data)]

    included = document.get("included")
    if isinstance(included, list):
        parts.included = [Fragment(f"/included/{i}", item) for i, item in enumerate(included)]

    return parts
