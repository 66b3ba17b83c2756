from __future__ import annotations

import re
from typing import List

from docmapper.core.persistence import Repository
from docmapper.core.result import MappingResult

from .models import ErrorDocument, ErrorMeta, ErrorObject, ErrorSource


def error_code(message: str) -> str:
    """Machine code for a validation message: "can't be blank" -> "can_t_be_blank"."""
    return re.sub(r"[^a-z0-9]+", "_", message.lower()).strip("_")


def build_error_report(
    result: MappingResult,
    repository: Repository,
) -> ErrorDocument:
    errors: List[ErrorObject] = []

    for entity in result.entities():
        failures = repository.validate(entity)
        if not failures:
            continue

        origin = result.first_resource(entity)
        meta = ErrorMeta(type=origin.type, id=entity.id)
        for field_name, messages in failures.items():
            wire_field = result.renames.wire_field(origin.type, field_name)
            for message in messages:
                errors.append(
                    ErrorObject(
                        title=message,
                        detail=message,
                        code=error_code(message),
                        meta=meta,
                        source=ErrorSource(pointer=f"{origin.pointer}/attributes/{wire_field}"),
                    )
                )

    return ErrorDocument(errors=errors)
