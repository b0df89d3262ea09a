from enum import Enum

from pydantic import BaseModel


class EventStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TenantRole(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"


# Roles allowed to mutate tenant data
MANAGER_ROLES: frozenset[str] = frozenset({TenantRole.OWNER.value, TenantRole.ADMIN.value})


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INTERNAL = "INTERNAL_SERVER_ERROR"


class ErrorBody(BaseModel):
    code: ErrorCode
    message: str
    status: int


class ErrorResponse(BaseModel):
    error: ErrorBody


class SuccessResponse(BaseModel):
    success: bool = True
