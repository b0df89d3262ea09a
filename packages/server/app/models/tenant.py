"""Tenant model (owned by the tenant/plan service; referenced for scoping)."""

from sqlmodel import Field, SQLModel

from .base import CreatedAtMixin, UUIDMixin


class Tenant(UUIDMixin, CreatedAtMixin, SQLModel, table=True):
    __tablename__ = "tenants"

    name: str = Field(nullable=False)
    slug: str = Field(unique=True, nullable=False, index=True)
