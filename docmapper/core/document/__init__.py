from .models import (
    DocumentParts,
    Fragment,
    RelationshipData,
    ResourceLink,
    ResourceObject,
    parse_link,
    parse_relationship,
    parse_resource,
    split_document,
)

__all__ = [
    "DocumentParts",
    "Fragment",
    "RelationshipData",
    "ResourceLink",
    "ResourceObject",
    "parse_link",
    "parse_relationship",
    "parse_resource",
    "split_document",
]
