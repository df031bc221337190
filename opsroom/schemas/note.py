"""Pydantic schemas for private room notes."""

from pydantic import BaseModel, Field

NOTE_MAX_LENGTH = 10000


class NoteSave(BaseModel):
    """Schema for saving the caller's note for a room."""

    note: str = Field(
        ...,
        max_length=NOTE_MAX_LENGTH,
        description="Free-text note, replaces any previous note",
        examples=["Follow up with the client on Friday"],
    )


class NoteResponse(BaseModel):
    """Schema for the caller's note for a room."""

    note: str = Field("", description="Saved note, empty if none")
