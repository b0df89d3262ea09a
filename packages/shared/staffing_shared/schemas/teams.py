"""
Team catalog schemas: teams, skills, memberships, skill grants and the
skill-incompatibility blacklist.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field

T = TypeVar("T")


def canonical_pair(a: T, b: T) -> tuple[T, T]:
    """Order a skill pair so the smaller id comes first.

    Incompatibility rows are unordered pairs stored as (min, max); every write
    and lookup goes through here so callers can pass either order.
    """
    return (a, b) if a < b else (b, a)


# ---------------------------------------------------------------------------
# Teams
# ---------------------------------------------------------------------------

class TeamCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None


class TeamUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None


class TeamRead(BaseModel):
    id: UUID
    tenant_id: UUID
    name: str
    description: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Skills
# ---------------------------------------------------------------------------

class SkillCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)


class SkillUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)


class SkillRead(BaseModel):
    id: UUID
    tenant_id: UUID
    team_id: UUID
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------

class TeamMemberAdd(BaseModel):
    user_id: UUID
    role: Optional[str] = Field(default=None, max_length=100)


class TeamMemberUpdate(BaseModel):
    role: Optional[str] = Field(default=None, max_length=100)


class TeamMemberRead(BaseModel):
    id: UUID
    tenant_id: UUID
    team_id: UUID
    user_id: UUID
    role: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class TeamMemberDetail(TeamMemberRead):
    """Membership row joined with the person's contact details."""
    email: Optional[str] = None
    display_name: Optional[str] = None


class MemberSkillAssign(BaseModel):
    skill_id: UUID
    proficiency_level: Optional[int] = Field(default=None, ge=0, le=10)


class MemberSkillUpdate(BaseModel):
    proficiency_level: Optional[int] = Field(default=None, ge=0, le=10)


class MemberSkillRead(BaseModel):
    id: UUID
    tenant_id: UUID
    team_member_id: UUID
    skill_id: UUID
    proficiency_level: Optional[int] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class MemberSkillDetail(MemberSkillRead):
    skill_name: str


# ---------------------------------------------------------------------------
# Skill incompatibility
# ---------------------------------------------------------------------------

class SkillIncompatibilityCreate(BaseModel):
    skill_id_1: UUID
    skill_id_2: UUID


class SkillIncompatibilityRead(BaseModel):
    tenant_id: UUID
    skill_id_1: UUID
    skill_id_2: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class SkillIncompatibilityDetail(BaseModel):
    skill_id_1: UUID
    skill_id_2: UUID
    skill_1_name: str
    skill_2_name: str
