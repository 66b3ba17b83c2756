from .builder import ResourceBuilder, find_scoped_or_raise
from .linker import RelationshipLinker
from .models import PendingRef, ResourceGraph, ResourceIdentifier, ResourceNode

__all__ = [
    "PendingRef",
    "RelationshipLinker",
    "ResourceBuilder",
    "ResourceGraph",
    "ResourceIdentifier",
    "ResourceNode",
    "find_scoped_or_raise",
]
