"""
Service error kinds and the JSON error envelope.

Services raise these instead of bare HTTPException so every rejection carries
a stable machine-readable code next to its human-readable message. The
message text is part of the API contract.
"""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from staffing_shared.schemas.common import ErrorCode


class ServiceError(HTTPException):
    code: ErrorCode = ErrorCode.INTERNAL
    status_code_default: int = 500

    def __init__(self, message: str):
        super().__init__(status_code=self.status_code_default, detail=message)
        self.message = message


class NotFoundError(ServiceError):
    code = ErrorCode.NOT_FOUND
    status_code_default = 404


class InvalidRequestError(ServiceError):
    code = ErrorCode.BAD_REQUEST
    status_code_default = 400


class ConflictError(ServiceError):
    code = ErrorCode.CONFLICT
    status_code_default = 409


class UnauthorizedError(ServiceError):
    code = ErrorCode.UNAUTHORIZED
    status_code_default = 401


class ForbiddenError(ServiceError):
    code = ErrorCode.FORBIDDEN
    status_code_default = 403


class InternalError(ServiceError):
    code = ErrorCode.INTERNAL
    status_code_default = 500


def error_body(code: ErrorCode, message: str, status: int) -> dict:
    return {"error": {"code": code.value, "message": message, "status": status}}


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.code, exc.message, exc.status_code),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
