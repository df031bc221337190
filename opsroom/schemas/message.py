"""Pydantic schemas for Message validation."""

from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    """Schema for sending a message to a room."""

    content: str = Field(
        ...,
        min_length=1,
        description="Message text",
        examples=["status green"],
    )


class MessageResponse(BaseModel):
    """Schema for a message in a room log."""

    content: str = Field(..., description="Message text")
    sender: str = Field(..., description="Caller id of the sender")
    timestamp: int = Field(
        ...,
        description="Send time in nanoseconds since the epoch",
    )
