"""Pydantic schemas for platform access control."""

from enum import Enum

from pydantic import BaseModel, Field


class OperatorRole(str, Enum):
    """Platform-wide operator tier.

    - ADMIN: may assign operator roles
    - USER: registered caller (has a saved profile)
    - GUEST: authenticated caller without a profile
    """

    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"


class OperatorRoleAssign(BaseModel):
    """Schema for assigning an operator role to a caller."""

    role: OperatorRole = Field(
        ...,
        description="Operator role to assign",
        examples=["admin", "user"],
    )


class OperatorRoleResponse(BaseModel):
    """Schema for the caller's operator role."""

    role: OperatorRole = Field(..., description="Caller's operator role")


class AdminStatusResponse(BaseModel):
    """Schema for the admin check."""

    is_admin: bool = Field(..., description="Whether the caller is an admin")
