"""
Error kinds raised by the leave and calendar services.

Each kind is an HTTPException so routers can let it propagate untouched;
`kind` is a stable machine-readable name rendered next to the message.
"""
from __future__ import annotations

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse


class LeaveDeskError(HTTPException):
    kind = "Error"
    default_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(status_code=self.default_status, detail=detail)

    @property
    def message(self) -> str:
        return self.detail


class ValidationError(LeaveDeskError):
    kind = "ValidationError"


class InvalidStatus(ValidationError):
    kind = "InvalidStatus"


class OverlappingRequest(LeaveDeskError):
    kind = "OverlappingRequest"


class InsufficientBalance(LeaveDeskError):
    kind = "InsufficientBalance"


class InvalidState(LeaveDeskError):
    kind = "InvalidState"


class Forbidden(LeaveDeskError):
    kind = "Forbidden"
    default_status = status.HTTP_403_FORBIDDEN


class NotFound(LeaveDeskError):
    kind = "NotFound"
    default_status = status.HTTP_404_NOT_FOUND


class UnprocessableInput(LeaveDeskError):
    kind = "UnprocessableInput"
    default_status = status.HTTP_422_UNPROCESSABLE_ENTITY


async def leavedesk_error_handler(_request: Request, exc: LeaveDeskError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "kind": exc.kind},
    )
