from __future__ import annotations

import re
from typing import Dict, List, Tuple

# Default naming convention for wire type names: "pet_dogs" -> "PetDog".

_IRREGULAR: Dict[str, str] = {
    "people": "person",
    "men": "man",
    "women": "woman",
    "children": "child",
    "mice": "mouse",
    "geese": "goose",
    "teeth": "tooth",
    "feet": "foot",
}

_UNCOUNTABLE = {"equipment", "information", "money", "series", "species", "news", "sheep", "fish"}

# Checked in order, first match wins.
_SINGULAR_RULES: List[Tuple[str, str]] = [
    (r"(quiz)zes$", r"\1"),
    (r"(matr|vert|ind)ices$", r"\1ix"),
    (r"(alias|status)(es)?$", r"\1"),
    (r"(octop|vir)i$", r"\1us"),
    (r"(cris|ax|test)es$", r"\1is"),
    (r"(shoe)s$", r"\1"),
    (r"(o)es$", r"\1"),
    (r"(bus)(es)?$", r"\1"),
    (r"([ti])a$", r"\1um"),
    (r"(x|ch|ss|sh)es$", r"\1"),
    (r"([^aeiouy]|qu)ies$", r"\1y"),
    (r"(m)ovies$", r"\1ovie"),
    (r"([lr])ves$", r"\1f"),
    (r"([^f])ves$", r"\1fe"),
    (r"(ss)$", r"\1"),
    (r"s$", ""),
]


def singularize(word: str) -> str:
    lower = word.lower()
    if lower in _UNCOUNTABLE:
        return word
    for plural, single in _IRREGULAR.items():
        if lower.endswith(plural):
            return word[: len(word) - len(plural)] + single
    for pattern, repl in _SINGULAR_RULES:
        if re.search(pattern, word, flags=re.IGNORECASE):
            return re.sub(pattern, repl, word, flags=re.IGNORECASE)
    return word


def pascalize(word: str) -> str:
    parts = [p for p in re.split(r"[_\-\s]+", word) if p]
    return "".join(p[:1].upper() + p[1:] for p in parts)


def default_type_name(wire_type: str) -> str:
    """Domain type name a wire type resolves to when no rename applies."""
    segments = re.split(r"([_\-\s]+)", wire_type)
    # only the last word is plural: "pet_dogs" -> "pet_dog"
    for i in range(len(segments) - 1, -1, -1):
        if segments[i] and not re.fullmatch(r"[_\-\s]+", segments[i]):
            segments[i] = singularize(segments[i])
            break
    return pascalize("".join(segments))
