from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from starlette.responses import JSONResponse

from docmapper.core.errors import CompileError, NotFoundError, TypeMismatchError

log = logging.getLogger("docmapper.api.errors")

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"


def _error_document(status: int, code: str, title: str, detail: Optional[str] = None, **meta: Any) -> Dict[str, Any]:
    error: Dict[str, Any] = {"status": str(status), "code": code, "title": title}
    if detail:
        error["detail"] = detail
    meta = {k: v for k, v in meta.items() if v is not None}
    if meta:
        error["meta"] = meta
    return {"errors": [error]}


def _response(status: int, payload: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status, content=payload, media_type=JSONAPI_MEDIA_TYPE)


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return _response(
        404,
        _error_document(404, exc.code, "Not Found", str(exc), type=exc.type, id=exc.id),
    )


async def _type_mismatch(request: Request, exc: TypeMismatchError) -> JSONResponse:
    return _response(422, _error_document(422, exc.code, "Unprocessable Entity", str(exc)))


async def _compile_error(request: Request, exc: CompileError) -> JSONResponse:
    # Rule misconfiguration is a server bug; never echo rule details to clients
    log.error("Mapper rules rejected: %s path=%s", exc, request.url.path)
    return _response(500, _error_document(500, "internal_error", "Internal Server Error"))


def install_exception_handlers(app: FastAPI) -> FastAPI:
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(TypeMismatchError, _type_mismatch)
    app.add_exception_handler(CompileError, _compile_error)
    return app


def validation_error_response(report: Dict[str, Any], status: int = 422) -> JSONResponse:
    """Response for an ``error_report`` of a mapping that failed validation."""
    return _response(status, report)
