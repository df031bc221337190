"""Pydantic schemas package for request/response validation."""

from .access import (
    AdminStatusResponse,
    OperatorRole,
    OperatorRoleAssign,
    OperatorRoleResponse,
)
from .message import (
    MessageCreate,
    MessageResponse,
)
from .note import (
    NoteResponse,
    NoteSave,
)
from .profile import (
    ProfileData,
    ProfileRole,
)
from .room import (
    ParticipantResponse,
    RoomCreate,
    RoomCreated,
    RoomJoin,
    RoomView,
)

__all__ = [
    # Access schemas
    "AdminStatusResponse",
    "OperatorRole",
    "OperatorRoleAssign",
    "OperatorRoleResponse",
    # Message schemas
    "MessageCreate",
    "MessageResponse",
    # Note schemas
    "NoteResponse",
    "NoteSave",
    # Profile schemas
    "ProfileData",
    "ProfileRole",
    # Room schemas
    "ParticipantResponse",
    "RoomCreate",
    "RoomCreated",
    "RoomJoin",
    "RoomView",
]
