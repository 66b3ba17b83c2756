from __future__ import annotations

from typing import Any, Optional


class MapperError(Exception):
    code = "mapper_error"


class CompileError(MapperError):
    """Raised while compiling rules, before any document is processed."""

    code = "compile_error"


class RulesError(CompileError):
    code = "rules_error"


class UnknownTypeError(CompileError):
    code = "unknown_type"

    def __init__(self, type_name: str, message: Optional[str] = None):
        self.type_name = type_name
        super().__init__(message or f"Unknown domain type for {type_name!r}")


class UnknownFieldError(CompileError):
    code = "unknown_field"

    def __init__(self, domain_type: type, field_name: str):
        self.domain_type = domain_type
        self.field_name = field_name
        super().__init__(f"undefined field {field_name!r} for {domain_type.__name__}")


class NotFoundError(MapperError):
    code = "not_found"

    def __init__(self, type_name: str, id: Any):
        self.type = type_name
        self.id = id
        super().__init__(f"Couldn't find {type_name} with id={id}")


class TypeMismatchError(MapperError):
    code = "type_mismatch"

    def __init__(self, domain_type: type, field_name: str, expected: str, got: Any):
        self.domain_type = domain_type
        self.field_name = field_name
        super().__init__(
            f"{domain_type.__name__}.{field_name} expected {expected}, got {type(got).__name__}"
        )
