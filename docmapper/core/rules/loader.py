"""
Ruleset file loader.

Reads mapper rules from a YAML or JSON file so that deployments can declare
whitelists and scopes next to their other configuration.

File format (YAML or JSON):
    rules:
      people: [name, pet, parent, {country: uruguay}]
      pet_dogs: [name, {country: uruguay}]
    unscoped: [tags]              # optional
    renames:                      # optional
      types: {persons: Person}
      attributes: {persons: {handle: name}}

Environment variable:
    DOCMAPPER_RULES_FILE: path used when no explicit path is given.

Unlike optional overrides, a rules file that cannot be read or parsed is a
configuration error and raises RulesError.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from docmapper.core.errors import RulesError

_log = logging.getLogger("docmapper.rules")


@dataclass(frozen=True)
class RuleSet:
    rules: Dict[str, List[Any]]
    unscoped: List[str] = field(default_factory=list)
    renames: Optional[Dict[str, Any]] = None


def _resolve_path(path: Optional[Path]) -> Path:
    if path is not None:
        return Path(path)
    env_path = os.getenv("DOCMAPPER_RULES_FILE", "").strip()
    if not env_path:
        raise RulesError("No rules file given and DOCMAPPER_RULES_FILE is not set")
    return Path(env_path)


def _parse_text(raw_text: str, source: Path) -> Any:
    # JSON first, YAML for everything else
    try:
        return json.loads(raw_text)
    except json.JSONDecodeError:
        pass
    try:
        return yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise RulesError(f"Failed to parse rules file {source} as JSON or YAML: {exc}") from exc


def load_ruleset(path: Optional[Path] = None) -> RuleSet:
    resolved = _resolve_path(path)
    try:
        raw_text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        raise RulesError(f"Cannot read rules file {resolved}: {exc}") from exc

    data = _parse_text(raw_text, resolved)
    if not isinstance(data, dict) or not isinstance(data.get("rules"), dict):
        raise RulesError(f"Rules file {resolved} must be a mapping with a 'rules' mapping")

    unscoped = data.get("unscoped") or []
    if not isinstance(unscoped, list) or not all(isinstance(t, str) for t in unscoped):
        raise RulesError(f"'unscoped' in {resolved} must be a list of type names")

    renames = data.get("renames")
    if renames is not None and not isinstance(renames, dict):
        raise RulesError(f"'renames' in {resolved} must be a mapping")

    _log.info("Loaded rules for %d types from %s", len(data["rules"]), resolved)
    return RuleSet(rules=data["rules"], unscoped=list(unscoped), renames=renames)
