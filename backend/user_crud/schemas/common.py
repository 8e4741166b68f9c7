"""Error body returned by every non-2xx response of the API."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class ErrorMeta(BaseModel):
    request_id: Optional[str] = None
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ErrorBody(BaseModel):
    ok: Literal[False] = False
    error: ErrorDetail
    meta: ErrorMeta


def error_response(
    code: str,
    message: str,
    status_code: int,
    *,
    request_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    body = ErrorBody(
        error=ErrorDetail(code=code, message=message, details=details),
        meta=ErrorMeta(request_id=request_id),
    )
    return JSONResponse(content=body.model_dump(mode="json"), status_code=status_code)
