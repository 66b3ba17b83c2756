from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field


class ErrorSource(BaseModel):
    pointer: str


class ErrorMeta(BaseModel):
    type: str
    id: Optional[Any] = None


class ErrorObject(BaseModel):
    status: Literal["422"] = "422"
    title: str
    detail: str
    code: str
    meta: ErrorMeta
    source: ErrorSource


class ErrorDocument(BaseModel):
    errors: List[ErrorObject] = Field(default_factory=list)

    def to_dict(self) -> dict:
        return self.model_dump(exclude_none=True)
