"""Error envelope schemas written by the web adapter."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import Field


class ErrorDetail(BaseModel):
    """One error message registered under a member key such as ``lines[0].sku``."""

    member: str = Field(title="Member key")
    message: str


class ErrorObject(BaseModel):
    """Error code, aggregate message and member-keyed details of an error result."""

    code: str
    message: str
    details: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    """Top-level JSON body written for error results."""

    error: ErrorObject
