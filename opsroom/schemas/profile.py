"""Pydantic schemas for Profile validation."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ProfileRole(str, Enum):
    """Display role shown next to a participant's name.

    Unrelated to the platform operator role used for authorization.
    """

    CLIENT = "client"
    ADMIN = "admin"
    CONSULTANT = "consultant"
    ENGINEER = "engineer"
    ANALYST = "analyst"


class ProfileData(BaseModel):
    """Schema for saving and returning a caller profile."""

    model_config = ConfigDict(from_attributes=True)

    display_name: str = Field(
        ...,
        min_length=1,
        max_length=32,
        description="Name shown to other participants",
        examples=["NEO", "Trinity"],
    )
    role: ProfileRole = Field(
        ...,
        description="Display role",
        examples=["engineer", "analyst"],
    )
