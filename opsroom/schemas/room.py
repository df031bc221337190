"""Pydantic schemas for Room validation."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .profile import ProfileData

ROOM_CODE_DIGITS = 7


def format_room_code(code: int) -> str:
    """Render a room code the way users type it (zero-padded)."""
    return str(code).zfill(ROOM_CODE_DIGITS)


class RoomCreate(BaseModel):
    """Schema for creating a new room."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Room title",
        examples=["Ops", "Incident 42"],
    )
    description: str = Field(
        "",
        max_length=256,
        description="Room description",
        examples=["Daily operations sync"],
    )


class RoomCreated(BaseModel):
    """Schema for the create room response."""

    id: int = Field(..., description="Identifier of the new room")


class RoomJoin(BaseModel):
    """Schema for joining a room by its access code."""

    code: int = Field(
        ...,
        ge=0,
        le=10**ROOM_CODE_DIGITS - 1,
        description="Seven-digit room access code",
        examples=[1234567],
    )


class RoomView(BaseModel):
    """Externally visible projection of a room."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Room identifier")
    title: str = Field(..., description="Room title")
    description: str = Field(..., description="Room description")
    creator: str = Field(..., description="Caller id of the room creator")
    code: int = Field(..., description="Room access code")
    participants: List[str] = Field(
        default_factory=list,
        description="Caller ids of current participants in join order",
    )

    @computed_field
    @property
    def formatted_code(self) -> str:
        """Access code zero-padded to seven digits."""
        return format_room_code(self.code)


class ParticipantResponse(BaseModel):
    """A room participant with their saved profile."""

    caller_id: str = Field(..., description="Participant caller id")
    profile: ProfileData = Field(..., description="Participant profile")
