from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(eq=False)
class Entity:
    """Base class for domain entities the mapper can build.

    Subclasses are dataclasses whose fields all carry defaults, so an empty
    instance can be created before attributes are applied. Fields annotated
    with another Entity subclass are to-one associations, fields annotated
    with ``List[<Entity subclass>]`` are to-many associations.

    Equality is identity: the same document resource must map to the same
    instance everywhere in a graph.
    """

    id: Any = None

    def validate(self) -> Dict[str, List[str]]:
        """Field name -> failure messages. Empty when the entity is valid."""
        return {}
